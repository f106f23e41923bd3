"""Update orchestration: single document, one rule, and all configured rules"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

from mdsync.config import Rule
from mdsync.core.merge import merge_documents
from mdsync.core.render import render_document
from mdsync.core.sections import sectionize
from mdsync.errors import DocumentNotFoundError, MdsyncError
from mdsync.store.base import DocumentStore, normalize_path


log = logging.getLogger(__name__)

Notify = Callable[[str], None]


class UpdateStatus(str, Enum):
    updated = "updated"
    unchanged = "unchanged"
    error = "error"


@dataclass
class UpdateResult:
    template: str
    target: str
    status: UpdateStatus
    before: str = ""
    after: str = ""
    error: Optional[str] = None


def _silent(message: str) -> None:
    pass


def merge_text(template_text: str, target_text: str) -> str:
    """Parse both texts, merge them, and render the result."""
    merged = merge_documents(sectionize(template_text), sectionize(target_text))
    return render_document(merged)


def update_document_from_template(
    store: DocumentStore,
    template_path: str,
    target_path: str,
    *,
    dry_run: bool = False,
    logger: Optional[logging.Logger] = None,
    notify: Optional[Notify] = None,
    ) -> UpdateResult:
    """Merge template into target and write the target back if its text changed.

    Raises DocumentNotFoundError when either path does not resolve; write
    failures from the store propagate unchanged.
    """
    logger = logger or log
    notify = notify or _silent

    template = store.resolve(template_path)
    if template is None:
        raise DocumentNotFoundError(template_path)
    target = store.resolve(target_path)
    if target is None:
        raise DocumentNotFoundError(target_path)

    current = store.read(target)
    merged = merge_text(store.read(template), current)

    if merged == current:
        logger.info("No changes needed for %s", target.path)
        notify(f"Skipped {target.path} from {template.path}")
        return UpdateResult(template.path, target.path, UpdateStatus.unchanged, current, merged)

    if dry_run:
        logger.info("Would update %s from %s", target.path, template.path)
        notify(f"Would update {target.path} from {template.path}")
    else:
        store.write(target, merged)
        logger.info("Updated %s from %s", target.path, template.path)
        notify(f"Updated {target.path} from {template.path}")
    return UpdateResult(template.path, target.path, UpdateStatus.updated, current, merged)


def run_rule(
    store: DocumentStore,
    template_path: str,
    folder_path: str,
    include_subfolders: bool = False,
    *,
    dry_run: bool = False,
    logger: Optional[logging.Logger] = None,
    notify: Optional[Notify] = None,
    ) -> list[UpdateResult]:
    """Apply the template to every document in the folder except the template itself.

    A failing document is logged and reported as an error result; the rest still run.
    """
    logger = logger or log
    notify = notify or _silent
    template_key = normalize_path(template_path)

    handles = [h for h in store.list_children(folder_path, include_subfolders) if h.path != template_key]
    if not handles:
        logger.info("No documents to process in %s (excluding template)", folder_path or ".")
        return []

    logger.debug("Rule %s -> %s: %d document(s)", template_key, folder_path or ".", len(handles))
    results = []
    for handle in handles:
        try:
            results.append(update_document_from_template(
                store, template_path, handle.path, dry_run=dry_run, logger=logger, notify=notify))
        except Exception as e:
            logger.error("Error updating %s from %s: %s", handle.path, template_key, e,
                         exc_info=not isinstance(e, MdsyncError))
            notify(f"Error updating {handle.path}: {e}")
            results.append(UpdateResult(template_key, handle.path, UpdateStatus.error, error=str(e)))
    return results


def run_all_rules(
    store: DocumentStore,
    rules: Iterable[Rule],
    *,
    dry_run: bool = False,
    logger: Optional[logging.Logger] = None,
    notify: Optional[Notify] = None,
    ) -> list[UpdateResult]:
    """Run each rule in order and return all results."""
    results = []
    for index, rule in enumerate(rules):
        (logger or log).debug("Running rule %d: %s -> %s", index, rule.template, rule.folder)
        results.extend(run_rule(
            store, rule.template, rule.folder, rule.include_subfolders,
            dry_run=dry_run, logger=logger, notify=notify,
        ))
    return results


def count_statuses(results: Iterable[UpdateResult]) -> dict[str, int]:
    counts = {status.value: 0 for status in UpdateStatus}
    for result in results:
        counts[result.status.value] += 1
    return counts
