"""Root test configuration: sample documents shared by unit and integration tests"""

import pytest

from mdsync.store import MemoryStore


TEMPLATE_MD = """\
---
tags: [tag1, tag2]
category: template
---
prop1:: template-value1

# Header 1
Template content 1

## Subheader 1
Template subcontent 1"""

TARGET_MD = """\
---
tags: [tag2, tag3]
status: active
---
prop1:: target-value1
prop2:: target-value2

# Header 1
Target content 1

## Subheader 1
Target subcontent 1

## Subheader 2
Target subcontent 2"""

MERGED_MD = """\
---
tags: [tag2, tag3]
category: template
status: active
---
prop1:: target-value1
prop2:: target-value2

# Header 1
Target content 1

## Subheader 1
Target subcontent 1

## Subheader 2
Target subcontent 2"""


@pytest.fixture(name="memory_store")
def memory_store_fixture():
    """Vault with a template and three notes, one of them in a subfolder."""
    return MemoryStore({
        "Projects/template.md": TEMPLATE_MD,
        "Projects/alpha.md": TARGET_MD,
        "Projects/beta.md": "",
        "Projects/archive/gamma.md": "# Header 1\nOld content",
    })


@pytest.fixture(name="template_md")
def template_md_fixture():
    return TEMPLATE_MD


@pytest.fixture(name="target_md")
def target_md_fixture():
    return TARGET_MD


@pytest.fixture(name="merged_md")
def merged_md_fixture():
    return MERGED_MD
