"""Shared fixtures for core unit tests"""

import pytest


CANONICAL_MD = """\
---
title: Weekly review
tags: [review, weekly]
aliases:
- week
-
---
status:: open
Free text line

# Goals
Ship the release

## Work
Finish the parser

## Personal
Call home

# Notes
Nothing yet"""

LOOSE_MD = """\

---
title:   Loose
tags:
  - a:
  - b
---

[mood:: calm] Some text with a property

kind:: journal

# Log


first line


second line
## Detail

### Deeper
detail text
# Log
appended log
"""


@pytest.fixture(name="canonical_md")
def canonical_md_fixture():
    return CANONICAL_MD


@pytest.fixture(name="loose_md")
def loose_md_fixture():
    return LOOSE_MD
