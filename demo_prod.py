"""Smoke test — routes a few values everywhere and verifies the chained log.

Usage:
    python demo_prod.py [WORK_DIR]
"""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

from fanout.config import config
from fanout.core.chained_log import verify_log_file
from fanout.models.request import InvocationRequest, PathBindings
from fanout.routing.dispatcher import OutputDispatcher


def main() -> None:
    """Run a dispatch across every file destination and check the log chain."""
    work = Path(sys.argv[1] if len(sys.argv) > 1 else tempfile.mkdtemp()).resolve()
    print(f"Fanout smoke test | environment: {config.environment} | dir: {work}")

    paths = PathBindings(
        append_path=str(work / "append.txt"),
        log_path=str(work / "run.log"),
        replace_path=str(work / "replace.txt"),
        xml_path=str(work / "values.xml"),
    )
    dispatcher = OutputDispatcher()

    result = dispatcher.dispatch(
        InvocationRequest(
            values=["Hello World", {"stage": "smoke", "ok": True}, "  indented  "],
            destinations=["harlox"],
            colors=["Green", "Yellow"],
            severity="I",
            separator="----",
            paths=paths,
        )
    )
    print(f"Delivered: {[d.value for d in result.delivered]}")
    print(f"Failed: {result.failed or 'none'}")
    print(f"Output: {result.output}")

    report = verify_log_file(paths.log_path, config.acting_user())
    print(f"Log chain valid: {report.line_count} line(s), last token {report.last_token}")


if __name__ == "__main__":
    main()
