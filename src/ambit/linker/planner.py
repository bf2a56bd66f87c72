"""Link planner: applies resolved pairs to the filesystem.

The planner is the boundary between the pure configuration engine and
the disk.  It resolves each ``ResolvedLink`` against the repository and
home roots, then creates (``sync``) or removes (``clean``) symlinks one
at a time, in declaration order.  ``move`` adopts home files the
repository does not track yet.

Failures for individual links do not stop the run: every link is
attempted and the outcome of each is collected in a ``LinkReport``.
Only a missing repository root aborts up front.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ambit.expander.expander import ResolvedLink
from ambit.linker.errors import LinkError, LinkErrorKind
from ambit.linker.filesystem import Filesystem, LocalFilesystem
from ambit.linker.paths import AmbitPaths
from ambit.linker.patterns import has_wildcard, match_pattern, unescape

logger = logging.getLogger(__name__)


class LinkAction(Enum):
    """What happened (or would happen, on a dry run) to one link."""

    CREATED = "created"
    WOULD_CREATE = "would create"
    UNCHANGED = "unchanged"
    REMOVED = "removed"
    WOULD_REMOVE = "would remove"
    MOVED = "moved"
    WOULD_MOVE = "would move"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class LinkOutcome:
    """Result of applying one resolved pair.

    ``repo`` and ``home`` are the absolute paths acted on; they are
    ``None`` when the pair could not be resolved to paths at all.
    """

    link: ResolvedLink
    action: LinkAction
    repo: Path | None = None
    home: Path | None = None
    error: LinkError | None = None


@dataclass
class LinkReport:
    """All outcomes of one ``sync``, ``clean`` or ``move`` run, in order."""

    operation: str
    outcomes: list[LinkOutcome] = field(default_factory=list)

    def add(self, outcome: LinkOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def counts(self) -> Counter[LinkAction]:
        """Number of outcomes per action."""
        return Counter(o.action for o in self.outcomes)

    @property
    def failures(self) -> list[LinkOutcome]:
        return [o for o in self.outcomes if o.action is LinkAction.FAILED]

    @property
    def ok(self) -> bool:
        """Return True if no link failed."""
        return not self.failures

    @property
    def changed(self) -> int:
        """Number of links actually created, removed or moved."""
        counts = self.counts
        return counts[LinkAction.CREATED] + counts[LinkAction.REMOVED] + counts[LinkAction.MOVED]

    def summary(self) -> str:
        counts = self.counts
        parts = [f"{count} {action.value}" for action, count in counts.items()]
        return f"{self.operation} result ({len(self.outcomes)} total): " + ", ".join(parts or ["nothing to do"])


class LinkPlanner:
    """Creates and removes the symlinks described by resolved pairs.

    Parameters
    ----------
    paths:
        Home, repository and configuration locations.
    filesystem:
        Filesystem capability; defaults to ``LocalFilesystem``.
    dry_run:
        When ``True`` nothing on disk is touched and outcomes report
        ``WOULD_CREATE`` / ``WOULD_REMOVE`` / ``WOULD_MOVE`` instead.
    """

    def __init__(
        self,
        paths: AmbitPaths,
        filesystem: Filesystem | None = None,
        dry_run: bool = False,
    ) -> None:
        self.paths = paths
        self.fs = filesystem or LocalFilesystem()
        self.dry_run = dry_run

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def materialize(self, link: ResolvedLink) -> list[tuple[Path, Path]]:
        """Return the absolute ``(repo, home)`` pairs for ``link``.

        A repository path with wildcards can name several files.  For an
        implicit mapping (identical repository and home paths) each match
        is mirrored into the home directory; otherwise the pattern must
        match exactly one file.

        Raises
        ------
        LinkError
            On a home-side wildcard or an ambiguous repository pattern.
        """
        if has_wildcard(link.home_path) and link.home_path != link.repo_path:
            raise LinkError(
                f"Wildcards are only allowed on the repository side: {link.home_path}",
                kind=LinkErrorKind.PATTERN,
            )
        if not has_wildcard(link.repo_path):
            return [
                (
                    self.paths.repo / unescape(link.repo_path),
                    self.paths.home / unescape(link.home_path),
                )
            ]

        matches = match_pattern(link.repo_path, self.paths.repo, self.fs)
        logger.debug("Pattern %s matched %d file(s)", link.repo_path, len(matches))
        if link.home_path == link.repo_path:
            return [(self.paths.repo / m, self.paths.home / m) for m in matches]
        if len(matches) != 1:
            raise LinkError(
                f"Pattern {link.repo_path} matched {len(matches)} files "
                f"but home path {link.home_path} names exactly one",
                kind=LinkErrorKind.PATTERN,
            )
        return [(self.paths.repo / matches[0], self.paths.home / unescape(link.home_path))]

    def _require_repo_root(self) -> None:
        if not self.fs.is_dir(self.paths.repo):
            raise LinkError(
                f"Dotfile repository {self.paths.repo} does not exist",
                kind=LinkErrorKind.MISSING_ROOT,
                path=self.paths.repo,
            )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def sync(self, links: list[ResolvedLink]) -> LinkReport:
        """Create every link that does not exist yet.

        An existing correct link is left alone; an existing file that is
        not the expected link is reported as a conflict, never replaced.

        Raises
        ------
        LinkError
            If the repository root is missing.
        """
        self._require_repo_root()
        report = LinkReport(operation="sync")
        for link in links:
            try:
                pairs = self.materialize(link)
            except LinkError as exc:
                report.add(LinkOutcome(link=link, action=LinkAction.FAILED, error=exc))
                continue
            for repo, home in pairs:
                report.add(self._sync_one(link, repo, home))
        logger.info("%s", report.summary())
        return report

    def _sync_one(self, link: ResolvedLink, repo: Path, home: Path) -> LinkOutcome:
        def outcome(action: LinkAction, error: LinkError | None = None) -> LinkOutcome:
            return LinkOutcome(link=link, action=action, repo=repo, home=home, error=error)

        if not self.fs.is_file(repo):
            return outcome(
                LinkAction.FAILED,
                LinkError(
                    f"Repository file {repo} must exist to be synced",
                    kind=LinkErrorKind.MISSING_SOURCE,
                    path=repo,
                ),
            )
        if self.fs.is_symlinked(home, repo):
            return outcome(LinkAction.UNCHANGED)
        if self.fs.lexists(home):
            logger.warning("Not linking %s: host file already exists", home)
            return outcome(
                LinkAction.FAILED,
                LinkError(
                    f"Host file {home} already exists and is not linked to {repo}",
                    kind=LinkErrorKind.CONFLICT,
                    path=home,
                ),
            )
        if self.dry_run:
            return outcome(LinkAction.WOULD_CREATE)
        try:
            self.fs.create_symlink(repo, home)
        except LinkError as exc:
            return outcome(LinkAction.FAILED, exc)
        return outcome(LinkAction.CREATED)

    def clean(self, links: list[ResolvedLink]) -> LinkReport:
        """Remove every link the configuration would create.

        Only home paths that are symlinks to the matching repository path
        are removed; anything else is skipped.

        Raises
        ------
        LinkError
            If the repository root is missing.
        """
        self._require_repo_root()
        report = LinkReport(operation="clean")
        for link in links:
            try:
                pairs = self.materialize(link)
            except LinkError as exc:
                report.add(LinkOutcome(link=link, action=LinkAction.FAILED, error=exc))
                continue
            for repo, home in pairs:
                report.add(self._clean_one(link, repo, home))
        logger.info("%s", report.summary())
        return report

    def _clean_one(self, link: ResolvedLink, repo: Path, home: Path) -> LinkOutcome:
        if not self.fs.is_symlinked(home, repo):
            logger.debug("Skipping %s: not linked to %s", home, repo)
            return LinkOutcome(link=link, action=LinkAction.SKIPPED, repo=repo, home=home)
        if self.dry_run:
            return LinkOutcome(link=link, action=LinkAction.WOULD_REMOVE, repo=repo, home=home)
        try:
            self.fs.remove_symlink(home)
        except LinkError as exc:
            return LinkOutcome(link=link, action=LinkAction.FAILED, repo=repo, home=home, error=exc)
        return LinkOutcome(link=link, action=LinkAction.REMOVED, repo=repo, home=home)

    def move(self, links: list[ResolvedLink]) -> LinkReport:
        """Move home files into the repository where they are not tracked yet.

        A pair is moved only when its repository path does not exist and
        its home path is a regular file rather than a symlink.  Every other
        pair is skipped.  Running ``sync`` afterwards links the moved files
        back into place.

        Raises
        ------
        LinkError
            If the repository root is missing.
        """
        self._require_repo_root()
        report = LinkReport(operation="move")
        for link in links:
            try:
                pairs = self.materialize(link)
            except LinkError as exc:
                report.add(LinkOutcome(link=link, action=LinkAction.FAILED, error=exc))
                continue
            for repo, home in pairs:
                report.add(self._move_one(link, repo, home))
        logger.info("%s", report.summary())
        return report

    def _move_one(self, link: ResolvedLink, repo: Path, home: Path) -> LinkOutcome:
        if self.fs.lexists(repo) or self.fs.is_symlink(home) or not self.fs.is_file(home):
            logger.debug("Skipping %s: nothing to move to %s", home, repo)
            return LinkOutcome(link=link, action=LinkAction.SKIPPED, repo=repo, home=home)
        if self.dry_run:
            return LinkOutcome(link=link, action=LinkAction.WOULD_MOVE, repo=repo, home=home)
        try:
            self.fs.move_file(home, repo)
        except LinkError as exc:
            return LinkOutcome(link=link, action=LinkAction.FAILED, repo=repo, home=home, error=exc)
        return LinkOutcome(link=link, action=LinkAction.MOVED, repo=repo, home=home)
