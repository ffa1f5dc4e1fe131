"""
Resolution of candidate Steam userdata roots.
Composes RootProviders in priority order and drops duplicates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from lunar_coiner.core.paths.root_providers import RootProvider, default_providers
from lunar_coiner.domain.models import InstallRoot
from lunar_coiner.utils.path_utils import PathUtils

log = logging.getLogger(__name__)


class PathResolver:
    """Produces the de-duplicated, priority-ordered list of install roots."""

    def __init__(
        self,
        providers: Iterable[RootProvider] | None = None,
        is_dir: Callable[[str], bool] = PathUtils.is_dir,
    ):
        """
        Initialize the resolver.

        Args:
            providers: Ordered root providers; platform defaults when omitted
            is_dir: Existence check used to filter candidates
        """
        self.providers = list(providers) if providers is not None else None
        self._is_dir = is_dir

    def _providers(self) -> list[RootProvider]:
        if self.providers is None:
            return default_providers()
        return self.providers

    def _candidates(self) -> list[InstallRoot]:
        candidates: list[InstallRoot] = []
        for provider in self._providers():
            try:
                candidates.extend(provider.roots())
            except Exception as e:
                log.warning(
                    "Root provider %s failed: %s", type(provider).__name__, e
                )
        return candidates

    def candidate_roots(self) -> list[tuple[InstallRoot, bool]]:
        """
        Every de-duplicated candidate with its existence status.

        Returns:
            List of (root, exists) pairs in priority order
        """
        seen: set[str] = set()
        result: list[tuple[InstallRoot, bool]] = []
        for root in self._candidates():
            key = PathUtils.canonical_key(root.path)
            if key in seen:
                continue
            seen.add(key)
            result.append((root, self._is_dir(str(root.path))))
        return result

    def resolve_roots(self) -> list[InstallRoot]:
        """
        Existing roots only, each canonical path at most once.

        Returns:
            List of InstallRoot in priority order, possibly empty
        """
        seen: set[str] = set()
        roots: list[InstallRoot] = []
        for root in self._candidates():
            if not self._is_dir(str(root.path)):
                log.debug("Skipping missing root %s", root.path)
                continue
            key = PathUtils.canonical_key(root.path)
            if key in seen:
                log.debug("Skipping duplicate root %s", root.path)
                continue
            seen.add(key)
            roots.append(root)
        return roots
