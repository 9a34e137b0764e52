"""
API Routes for Explanations.

Endpoints
---------
- `POST /api/explain`: Explain a pasted text, optionally with clarification answers.

Design Decisions
----------------
- **Stateless**: The handler does not know which round it is serving; a body
  with `answers` is simply a clarification round.
- **Hand-rolled body checks**: Validation failures must surface as 400 with a
  user-facing `error` message, not FastAPI's 422 schema dump, so the body is
  read as raw JSON and normalized by `ExplainRequest.from_payload`.
- **Threadpool**: The explainer performs blocking I/O, so it runs off the
  event loop.
"""

from __future__ import annotations

import json
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from plainly.core.contracts.explain import ExplainRequest, ExplainResult
from plainly.core.errors import ExplainError
from plainly.core.settings import get_logger, load_settings
from plainly.explain.explainer import Explainer

router = APIRouter(prefix="/api", tags=["Explain"])

logger = get_logger(__name__)


def get_explainer() -> Explainer:
    """FastAPI dependency that builds the production explainer.

    Tests replace it through `app.dependency_overrides[get_explainer]`.
    """
    return Explainer.from_settings(load_settings())


@router.post(
    "/explain",
    response_model=ExplainResult,
    response_model_exclude_none=True,
    summary="Explain a confusing text in plain language",
)
async def explain(
    request: Request,
    explainer: Annotated[Explainer, Depends(get_explainer)],
) -> ExplainResult:
    """
    Validate the body, run the explainer, and return its normalized result.

    Status codes
    ------------
    - 200: `ExplainResult` JSON.
    - 400: `{"error": ...}` for empty text or an unknown mode.
    - 500: `{"error": ...}` for any failure past validation.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ExplainError("Request body must be valid JSON.") from exc

    explain_request = ExplainRequest.from_payload(body)

    try:
        return await run_in_threadpool(explainer.explain_request, explain_request)
    except ExplainError:
        raise
    except Exception as exc:
        # Unknown failures still answer with the {"error": ...} shape.
        logger.exception("Unexpected failure while explaining")
        raise ExplainError(str(exc)) from exc


__all__ = ["router", "get_explainer"]
