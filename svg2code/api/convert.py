"""POST /api/convert — flat-list conversion of uploaded files."""

from __future__ import annotations

import logging
import tempfile
import time
from pathlib import Path, PurePath

from fastapi import APIRouter

from svg2code.config import settings
from svg2code.engine.orchestrator import parse_files
from svg2code.models.requests import ConvertRequest
from svg2code.models.responses import ConvertResponse, FailureOut

logger = logging.getLogger(__name__)

router = APIRouter()


# Plain def: FastAPI runs it in the threadpool, off the event loop
@router.post("/convert", response_model=ConvertResponse)
def convert(req: ConvertRequest) -> ConvertResponse:
    start = time.perf_counter()

    with tempfile.TemporaryDirectory(prefix=settings.temp_dir_prefix) as tmp:
        upload_dir = Path(tmp)
        uploaded: dict[Path, str] = {}
        for index, upload in enumerate(req.files):
            # One directory per upload keeps duplicate names apart
            name = PurePath(upload.name).name
            path = upload_dir / str(index) / name
            path.parent.mkdir()
            path.write_text(upload.content, encoding="utf-8")
            uploaded[path] = upload.name

        result = parse_files(list(uploaded), req.accessor_name, req.options)

        artifacts = []
        for artifact in result.artifacts:
            original = Path(uploaded[artifact.source_file])
            artifacts.append(
                artifact.model_copy(
                    update={
                        "source_file": original,
                        "preview_image_file": original if artifact.preview_image_file else None,
                    }
                )
            )
        failures = [
            FailureOut(file=uploaded.get(f.file, f.file.name), error=f.error, message=f.message)
            for f in result.failures
        ]

    elapsed = (time.perf_counter() - start) * 1000
    logger.info("Converted %d/%d uploads in %.0fms", len(artifacts), len(req.files), elapsed)
    return ConvertResponse(artifacts=artifacts, failures=failures, processing_time_ms=round(elapsed, 1))
