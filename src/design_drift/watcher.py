"""One monitoring cycle: fetch, snapshot, compare, notify, persist.

The cycle is strictly sequential and keeps no state between runs other than
the baseline file. Any error other than the degraded variables case
propagates to the caller, which is responsible for the failure notice.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .baseline import load_baseline, save_baseline
from .config import WatcherConfig
from .diff import diff_snapshots, versions_between
from .logging_config import get_logger
from .notify import Notifier
from .remote import FigmaClient
from .report import assemble_initial_report, assemble_report
from .snapshot import build_snapshot, load_variables

logger = get_logger(__name__)


class RunOutcome(str, Enum):
    """How a successful run ended."""

    INITIALIZED = "initialized"
    NO_NEW_VERSION = "no_new_version"
    NO_CHANGES = "no_changes"
    CHANGES_REPORTED = "changes_reported"


def run_once(
    client: FigmaClient,
    notifier: Notifier,
    config: WatcherConfig,
    baseline_path: Optional[Union[str, Path]] = None,
    persist: bool = True,
) -> RunOutcome:
    """Run a single watcher cycle.

    Args:
        client: Figma API client for the watched file.
        notifier: Channel receiving the initialization or change report.
        config: Rendering limits, timezone and default baseline path.
        baseline_path: Overrides ``config.snapshot_path``.
        persist: When False the baseline file is left untouched (dry run).

    Returns:
        The RunOutcome describing what happened.
    """
    path = Path(baseline_path or config.snapshot_path)
    tz = config.timezone

    revisions = client.get_versions()
    latest = revisions[0] if revisions else None
    latest_id = latest.id if latest else None

    previous = load_baseline(path)

    if (
        previous is not None
        and previous.meta.version_id
        and latest_id
        and previous.meta.version_id == latest_id
    ):
        logger.info("No new version. Skip.")
        return RunOutcome.NO_NEW_VERSION

    current = build_snapshot(
        client.get_file(),
        client.get_styles(),
        load_variables(client.get_local_variables),
    )
    current.stamp_revision(latest)

    if previous is None:
        if persist:
            save_baseline(current, path)
        notifier.send(assemble_initial_report(
            current,
            revisions,
            recent_limit=config.initial_timeline_entries,
            tz=tz,
        ))
        return RunOutcome.INITIALIZED

    diff = diff_snapshots(previous, current)

    if diff.total_changes == 0:
        logger.info("No meaningful changes.")
        outcome = RunOutcome.NO_CHANGES
    else:
        window = versions_between(revisions, previous.meta.version_id, latest_id)
        report = assemble_report(
            diff,
            window,
            previous,
            current,
            latest=latest,
            file_key=client.file_key,
            all_revisions=revisions,
            item_limit=config.max_listed_entities,
            timeline_limit=config.max_timeline_entries,
            tz=tz,
        )
        logger.info(f"Detected {report.total_changes} changes across {len(window)} versions")
        notifier.send(report.to_notification())
        outcome = RunOutcome.CHANGES_REPORTED

    if persist:
        save_baseline(current, path)
    return outcome
