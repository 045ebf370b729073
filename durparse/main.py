import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

import uvicorn

from .cli import parse_args
from .config import ParserConfig
from .errors import DurationParseError
from .logging_async import configure_logging, get_logger, log_worker
from .parser import DurationParser
from .webapp import create_app


def _parse_options(params) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "allow_negative": params.allow_negative,
        "merge_duplicates": params.merge_duplicates,
        "strict_negative_position": params.strict_negative_position,
    }
    if params.ambiguous_unit is not None:
        options["ambiguous_unit"] = params.ambiguous_unit
    if params.max_length is not None:
        options["max_length"] = params.max_length
    return options


def _format_ms(value: float):
    return int(value) if float(value).is_integer() else value


def report_error(exc: DurationParseError) -> None:
    print(f"[error] {exc} ({exc.code})")
    if exc.suggestions:
        print(f"[error] did you mean: {', '.join(exc.suggestions)}")


def run_parse(parser: DurationParser, params) -> None:
    options = _parse_options(params)
    if params.detailed:
        result = parser.parse_detailed(params.value, **options)
        if params.json:
            print(json.dumps(result.to_dict()))
            return
        for item in result.data:
            print(f"{item.duration:>12} {item.unit:<3}= {item.milliseconds}ms")
        print(f"{'total':>16}= {result.total_milliseconds}ms")
        if result.dominant_unit:
            print(f"{'dominant':>16}= {result.dominant_unit.unit}")
        return
    milliseconds = parser.parse(params.value, **options)
    if params.json:
        print(json.dumps({"value": params.value, "milliseconds": milliseconds}))
    else:
        print(milliseconds)


def run_format(parser: DurationParser, params) -> None:
    options: Dict[str, Any] = {
        "long": params.long,
        "precision": params.precision,
        "compound": params.compound,
        "preferred_units": params.preferred_units,
        "use_intl": params.use_intl,
        "separator": params.separator,
    }
    if params.locale:
        options["locale"] = params.locale
    print(parser.format(_format_ms(params.ms), **options))


def run_validate(parser: DurationParser, params) -> bool:
    options = _parse_options(params)
    all_valid = True
    for value in params.values:
        valid = parser.is_valid(value, **options)
        all_valid = all_valid and valid
        print(f"{'ok' if valid else 'invalid':>8}: {value}")
    return all_valid


def run_expires(parser: DurationParser, params) -> None:
    options = _parse_options(params)
    if params.seconds:
        print(parser.get_expires_in(params.value, **options))
    else:
        print(parser.get_expires_at(params.value, **options).isoformat())


async def serve_async(params, parser: Optional[DurationParser] = None):
    host = getattr(params, "host", "0.0.0.0")
    port = getattr(params, "port", 8000)

    log_queue: asyncio.Queue = asyncio.Queue()
    stop_event = asyncio.Event()
    log_task = asyncio.create_task(log_worker(log_queue, stop_event))
    logger = get_logger(log_queue)

    app = create_app(parser or DurationParser(ParserConfig.from_env()), logger)
    config = uvicorn.Config(app, host=host, port=port, loop="asyncio", log_level="info")
    server = uvicorn.Server(config)

    logger.info(f"[serve] listening on http://{host}:{port}")
    try:
        await server.serve()
    finally:
        stop_event.set()
        await log_queue.join()
        log_task.cancel()
        await asyncio.gather(log_task, return_exceptions=True)
        print("[exit] done.")


def main(argv: Optional[List[str]] = None):
    params = parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(params.verbose)
    try:
        config = ParserConfig.from_env()
    except ValueError as exc:
        print(f"[error] {exc}")
        sys.exit(2)
    parser = DurationParser(config)
    try:
        if params.command == "parse":
            run_parse(parser, params)
        elif params.command == "format":
            run_format(parser, params)
        elif params.command == "suggest":
            for suggestion in parser.get_suggestions(params.token, params.limit):
                print(suggestion)
        elif params.command == "units":
            for alias in parser.get_supported_units():
                print(alias)
        elif params.command == "validate":
            if not run_validate(parser, params):
                sys.exit(1)
        elif params.command == "expires":
            run_expires(parser, params)
        elif params.command == "serve":
            try:
                asyncio.run(serve_async(params, parser))
            except KeyboardInterrupt:
                print("\n[interrupt] server exiting…")
        else:
            raise ValueError(f"Unknown command: {params.command}")
    except DurationParseError as exc:
        report_error(exc)
        sys.exit(1)
    except ValueError as exc:
        print(f"[error] {exc}")
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - exercised via CLI invocation
    main(sys.argv[1:])
