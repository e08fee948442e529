from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from ..config import Config
from ..domain.errors import CsvIntakeError
from ..services.aggregate.fields import build_field_summary
from ..services.output.manifest_writer import write_manifest
from ..services.output.utils import sha256_file
from ..services.output.workbook_writer import write_workbook
from ..services.validate_service import ValidationOutcome
from ..types import ManifestInputsEntry
from ..utils.logging_setup import close_logging
from .container import Container
from .run_manager import start_run


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class Orchestrator:
    container: Container
    cfg: Config
    logger: logging.Logger

    def run(self, inputs: Sequence[Path], out_dir: Path) -> int:
        """
        Validate and store each file in turn: read -> validate -> store -> report.
        Files are processed strictly one after another, each with its own validator.
        Returns 0 on success, 1 when there was nothing to process, 3 on failure.
        """
        if not inputs:
            self.logger.error("No input files given")
            return 1

        run_ctx = start_run(out_dir)
        started = _now()
        entries: list[ManifestInputsEntry] = []
        failed: list[str] = []

        try:
            for i, path in enumerate(inputs, start=1):
                self.logger.info(f"Processing file {i}/{len(inputs)}: {path.name}")
                try:
                    entry = self._process_file(path, run_ctx.run_dir)
                except CsvIntakeError as e:
                    self.logger.error(f"Upload failed for {path.name}: {e}")
                    failed.append(path.name)
                    if self.cfg.strict_fail:
                        break
                    continue
                entries.append(entry)

            write_manifest(
                run_dir=run_ctx.run_dir,
                inputs=entries,
                started_at=started,
                finished_at=_now(),
                cfg=self.cfg,
                logger=self.logger,
            )

            log_extra = {"log_file": str(run_ctx.log_files.human)}
            if failed:
                self.logger.error(
                    f"Run finished with {len(failed)} failed file(s): {failed}", extra=log_extra
                )
                return 3
            self.logger.info(f"Run completed successfully ({len(entries)} file(s))", extra=log_extra)
            return 0

        except Exception as e:
            self.logger.error(f"Pipeline failed: {e}", exc_info=True)
            return 3
        finally:
            close_logging()

    def _process_file(self, path: Path, run_dir: Path) -> ManifestInputsEntry:
        outcome = self.container.validate.validate_file(path)
        self._report(path.name, outcome)

        upload_id = self.container.api.store_upload(path.name, outcome.results, outcome.summary)
        self.logger.info(f"{path.name} has been validated and stored", extra={"upload_id": upload_id})

        fields = build_field_summary(outcome.rows)
        for name, stats in fields.numeric.items():
            self.logger.info(
                f"  {name}: min={stats['min']:g} max={stats['max']:g} "
                f"avg={stats['avg']:.2f} count={stats['count']}"
            )

        if self.cfg.write_workbook:
            out_path = run_dir / f"{path.stem}_validated.xlsx"
            write_workbook(outcome, out_path)
            self.logger.info(f"Wrote {out_path.name}", extra={"path": str(out_path)})

        return {
            "path": str(path),
            "sha256": sha256_file(path),
            "upload_id": upload_id,
            "summary": outcome.summary.to_dict(),
        }

    def _report(self, name: str, outcome: ValidationOutcome) -> None:
        s = outcome.summary
        types = ", ".join(f"{c}={t.value}" for c, t in s.column_types.items())
        self.logger.info(f"'{name}': column types: {types}")
        self.logger.info(
            f"'{name}': {s.total_rows} rows, {s.valid_rows} valid, "
            f"{s.duplicate_rows} duplicate, {s.error_rows} with errors"
        )
        if s.validation_errors:
            shown = s.validation_errors[: self.cfg.max_errors]
            self.logger.warning(
                f"'{name}': {len(s.validation_errors)} rows with issues (showing first {len(shown)})"
            )
            for msg in shown:
                self.logger.warning(f"  {msg}")
