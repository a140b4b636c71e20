from __future__ import annotations

import asyncio
import logging

from upkeep.logging_context import MetaFilter, add_meta, get_meta, remove_meta


def _record() -> logging.LogRecord:
    return logging.LogRecord("upkeep", logging.INFO, __file__, 1, "hello", None, None)


def test_meta_is_rendered_onto_records() -> None:
    async def scenario() -> str:
        add_meta(baseBranch="dev")
        record = _record()
        MetaFilter().filter(record)
        remove_meta("baseBranch")
        return record.meta  # type: ignore[attr-defined]

    assert asyncio.run(scenario()) == " baseBranch=dev"


def test_empty_meta_renders_nothing() -> None:
    async def scenario() -> str:
        record = _record()
        MetaFilter().filter(record)
        return record.meta  # type: ignore[attr-defined]

    assert asyncio.run(scenario()) == ""


def test_meta_is_isolated_per_task() -> None:
    async def branch(name: str) -> dict[str, str]:
        add_meta(baseBranch=name)
        await asyncio.sleep(0)
        return get_meta()

    async def scenario() -> list[dict[str, str]]:
        return list(await asyncio.gather(branch("main"), branch("dev")))

    assert asyncio.run(scenario()) == [{"baseBranch": "main"}, {"baseBranch": "dev"}]


def test_remove_meta() -> None:
    async def scenario() -> dict[str, str]:
        add_meta(baseBranch="dev", repository="acme/widgets")
        remove_meta("baseBranch")
        return get_meta()

    assert asyncio.run(scenario()) == {"repository": "acme/widgets"}
