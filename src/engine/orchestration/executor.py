from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing
from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

from src.app.core.exceptions import PipelineError
from src.app.repositories.interfaces import PipelinesRepository
from src.engine.orchestration.context import RunContext
from src.engine.ports.connectors import Record, RecordStream
from src.engine.registry import ConnectorRegistry
from src.engine.services.logctx import ctx_prefix
from src.engine.services.streams import tee
from src.engine.services.time_utils import utcnow

logger = logging.getLogger("el_engine")


@dataclass(slots=True)
class RunResult:
    pipeline_name: str
    started_at: datetime
    finished_at: datetime | None = None
    records: int = 0
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error

    def finish(self, records: int, run_error: BaseException | str | None = None) -> RunResult:
        self.records = records
        self.error = str(run_error) if run_error else ""
        self.finished_at = utcnow()
        return self


class RecordCounter:
    """Tap of the tee: counts records that entered the load stage."""

    def __init__(self) -> None:
        self.value = 0

    def __call__(self, _record: Record) -> None:
        self.value += 1


class PipelineExecutor:
    """Execution of one pipeline run (lookup -> resolve -> extract -> tee -> load).

    ``run`` never raises for run-time failures: every error ends up in
    ``RunResult.error``.
    """

    def __init__(
        self,
        *,
        registry: ConnectorRegistry,
        pipelines: PipelinesRepository,
    ) -> None:
        self._registry = registry
        self._pipelines = pipelines

    async def run(self, ctx: RunContext, name: str) -> RunResult:
        result = RunResult(pipeline_name=name, started_at=utcnow())
        rid = uuid4().hex[:8]

        # 1) lookup + resolve + extract
        try:
            pipeline = await self._pipelines.get_pipeline(name)
            src, dst = self._registry.resolve(pipeline.source_name, pipeline.destination_name)
            stream: RecordStream = await src.extract(ctx, pipeline.source_config)
        except PipelineError as exc:
            logger.warning("Run %s failed before load: %s", ctx_prefix(pname=name, rid=rid), exc)
            return result.finish(0, exc)
        except Exception as exc:
            logger.exception("Run %s crashed before load", ctx_prefix(pname=name, rid=rid))
            return result.finish(0, exc)

        prefix = ctx_prefix(pname=name, rid=rid, src=src.info().name, dst=dst.info().name)
        logger.info("Run %s started", prefix)

        # 2) tee -> load
        counter = RecordCounter()
        load_error: BaseException | None = None
        try:
            async with aclosing(tee(stream, counter)) as teed:
                await dst.load(ctx, pipeline.destination_config, teed)
        except PipelineError as exc:
            load_error = exc
        except asyncio.CancelledError:
            logger.warning("Run %s aborted: task cancelled", prefix)
            raise
        except Exception as exc:
            logger.exception("Run %s crashed during load", prefix)
            load_error = exc
        finally:
            # the producer must not outlive the run
            await stream.aclose()

        result.finish(counter.value, load_error)
        if result.ok:
            logger.info("Run %s SUCCESS records=%d", prefix, result.records)
        else:
            logger.warning("Run %s FAILED records=%d: %s", prefix, result.records, result.error)
        return result
