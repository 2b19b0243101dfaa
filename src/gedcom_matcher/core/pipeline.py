from __future__ import annotations

import sys
from pathlib import Path

from gedcom_matcher.core.context import MatchContext
from gedcom_matcher.core.exceptions import GedcomLoadError, MatcherError
from gedcom_matcher.core.reconcile import match_and_update
from gedcom_matcher.core.session import ReconcileSession
from gedcom_matcher.exporter import serialize
from gedcom_matcher.loader import GEDCOMStructureError, GEDCOMTree, GedcomSyntaxError, load_gedcom


class Pipeline:
    """
    Orchestrates load -> reconcile -> write.
    No business logic lives here.
    """

    def __init__(self, context: MatchContext):
        self.ctx = context
        self.log = context.logger

    def _load(self, path: str) -> GEDCOMTree:
        try:
            return load_gedcom(path)
        except (GedcomSyntaxError, GEDCOMStructureError) as exc:
            raise GedcomLoadError(f"{path}: {exc}") from exc
        except OSError as exc:
            raise GedcomLoadError(f"{path}: cannot read file ({exc})") from exc

    def _write(self, data: bytes) -> None:
        if self.ctx.output_path:
            Path(self.ctx.output_path).write_bytes(data)
            self.log.info("Wrote %s", self.ctx.output_path)
        else:
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()

    def run(self) -> ReconcileSession:
        self.log.info("Pipeline starting")

        old_tree = self._load(self.ctx.old_path)
        new_tree = self._load(self.ctx.new_path)

        session = ReconcileSession(config=self.ctx.config, logger=self.log)

        try:
            self.ctx.duplicates = match_and_update(session, old_tree, new_tree)
            data = serialize(new_tree, self.ctx.wrap_width, self.ctx.output_encoding)
        except MatcherError:
            self.log.exception("Reconciliation failed")
            raise
        except Exception as exc:
            self.log.exception("Pipeline execution failed")
            raise MatcherError(str(exc)) from exc

        self._write(data)
        self.ctx.stats = {name: dict(counter) for name, counter in session.stats.items()}

        self.log.info("Pipeline completed successfully")
        return session
