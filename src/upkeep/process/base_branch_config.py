from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from upkeep.config.errors import ConfigFetchError
from upkeep.config.merge import merge_child_config
from upkeep.models.config import RepositoryConfig, UseBaseBranchConfig

if TYPE_CHECKING:
    from upkeep.config.presets import PresetResolver
    from upkeep.config.repository_cache import RepositoryCache
    from upkeep.platform.protocol import Platform

logger = logging.getLogger(__name__)


class BaseBranchConfigResolver:
    """Produces the effective config for one base branch.

    With ``useBaseBranchConfig: merge`` the config file is also read from the
    base branch itself and merged over the run config. Branches other than the
    default one get their own branch prefix so their update branches never
    collide with the default branch's.
    """

    def __init__(
        self,
        platform: Platform,
        preset_resolver: PresetResolver,
        repository_cache: RepositoryCache,
    ) -> None:
        self._platform = platform
        self._preset_resolver = preset_resolver
        self._cache = repository_cache

    async def resolve(self, base_branch: str, config: RepositoryConfig) -> RepositoryConfig:
        logger.debug("baseBranch: %s", base_branch)

        branch_config = config.model_copy(deep=True)

        if (
            config.use_base_branch_config == UseBaseBranchConfig.MERGE
            and base_branch != config.default_branch
        ):
            logger.debug("Merging config from base branch %s because useBaseBranchConfig=merge", base_branch)
            branch_config = await self._merge_branch_config(base_branch, config)

        if base_branch != branch_config.default_branch:
            branch_config.branch_prefix += f"{base_branch}-"
            branch_config.branch_prefix_old += f"{base_branch}-"
            branch_config.has_base_branches = True

        return merge_child_config(branch_config, {"baseBranch": base_branch})

    async def _merge_branch_config(self, base_branch: str, config: RepositoryConfig) -> RepositoryConfig:
        config_file_name = self._cache.config_file_name
        if not config_file_name:
            logger.error("No config file name detected for this repository; cannot read it from %s", base_branch)
            raise ConfigFetchError(config_file_name, base_branch)

        try:
            raw = await self._platform.get_json_file(config_file_name, config.repository, base_branch)
        except Exception as e:
            logger.error(
                "Error fetching config file %s from base branch %s - possible config name mismatch between branches? (%s)",
                config_file_name,
                base_branch,
                e,
            )
            raise ConfigFetchError(config_file_name, base_branch) from e
        logger.debug("Base branch config raw: %s", raw)

        # baseBranches always reflects the top-level run, never a branch-local value
        raw = {key: value for key, value in raw.items() if key != "baseBranches"}
        try:
            resolved = await self._preset_resolver.resolve(raw, config)
            merged = merge_child_config(config, resolved)
        except ValidationError as e:
            logger.error(
                "Invalid config file %s on base branch %s: %s",
                config_file_name,
                base_branch,
                e,
            )
            raise ConfigFetchError(config_file_name, base_branch) from e

        if config.print_config:
            logger.info("Base branch config after merge: %s", merged.to_document())

        merged.base_branches = list(config.base_branches)
        return merged
