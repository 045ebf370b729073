"""HTTP surface for the duration parser."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from .errors import DurationParseError
from .parser import DurationParser


def _error_response(exc: DurationParseError) -> HTTPException:
    return HTTPException(status_code=400, detail=exc.to_dict())


def create_app(
    parser: Optional[DurationParser] = None, logger: Optional[logging.Logger] = None
) -> FastAPI:
    parser = parser or DurationParser()
    logger = logger or logging.getLogger("durparse.web")

    app = FastAPI(title="durparse Web API")
    app.state.parser = parser

    def _parse_options(
        ambiguous_unit: Optional[str], allow_negative: bool, max_length: Optional[int]
    ) -> Dict[str, Any]:
        options: Dict[str, Any] = {"allow_negative": allow_negative}
        if ambiguous_unit is not None:
            options["ambiguous_unit"] = ambiguous_unit
        if max_length is not None:
            options["max_length"] = max_length
        return options

    @app.get("/api/parse")
    async def api_parse(
        value: str,
        ambiguous_unit: Optional[str] = None,
        allow_negative: bool = False,
        max_length: Optional[int] = None,
        detailed: bool = False,
    ) -> JSONResponse:
        try:
            options = _parse_options(ambiguous_unit, allow_negative, max_length)
            if detailed:
                payload = parser.parse_detailed(value, **options).to_dict()
            else:
                payload = {"value": value, "milliseconds": parser.parse(value, **options)}
        except DurationParseError as exc:
            logger.info(f"[parse] rejected {value!r}: {exc.code}")
            raise _error_response(exc) from exc
        except (TypeError, ValueError) as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return JSONResponse(payload)

    @app.get("/api/format")
    async def api_format(
        ms: float,
        long: bool = False,
        precision: int = 0,
        compound: bool = False,
        unit: Optional[List[str]] = Query(None),
        locale: Optional[str] = None,
        intl: bool = False,
        separator: str = ", ",
    ) -> JSONResponse:
        options: Dict[str, Any] = {
            "long": long,
            "precision": precision,
            "compound": compound,
            "preferred_units": unit,
            "use_intl": intl,
            "separator": separator,
        }
        if locale:
            options["locale"] = locale
        try:
            text = parser.format(ms, **options)
        except (TypeError, ValueError) as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return JSONResponse({"milliseconds": ms, "formatted": text})

    @app.get("/api/suggest")
    async def api_suggest(value: str, limit: Optional[int] = None) -> JSONResponse:
        return JSONResponse(
            {"value": value, "suggestions": parser.get_suggestions(value, limit)}
        )

    @app.get("/api/units")
    async def api_units() -> JSONResponse:
        return JSONResponse({"units": parser.get_supported_units()})

    @app.get("/api/validate")
    async def api_validate(
        value: str,
        ambiguous_unit: Optional[str] = None,
        allow_negative: bool = False,
    ) -> JSONResponse:
        options = _parse_options(ambiguous_unit, allow_negative, None)
        return JSONResponse({"value": value, "valid": parser.is_valid(value, **options)})

    return app
