#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

import logging
import logging.config
from argparse import ArgumentParser
from datetime import datetime
from enum import IntEnum, auto
from typing import Any, NamedTuple

import configargparse
import structlog

DEFAULT_ENV_VAR_PREFIX = 'typewire_'


def create_parser(*, prefix: str | None = None, add_help: bool = True) -> ArgumentParser:
    """ Parser whose options can also be given as `TYPEWIRE_*` environment variables."""
    return configargparse.ArgumentParser(auto_env_var_prefix=prefix or DEFAULT_ENV_VAR_PREFIX, add_help=add_help)


def colored_level_styles() -> dict[str, str]:
    import colorama
    return {
        'critical': colorama.Style.BRIGHT + colorama.Fore.RED,
        'exception': colorama.Fore.RED,
        'error': colorama.Fore.RED,
        'warn': colorama.Fore.YELLOW,
        'warning': colorama.Fore.YELLOW,
        'info': colorama.Fore.GREEN,
        'debug': colorama.Style.BRIGHT + colorama.Fore.CYAN,
        'notset': colorama.Back.RED,
    }


class ConsoleRenderer(structlog.dev.ConsoleRenderer):
    """ structlog's console renderer with our level colors, datetimes are printed without their repr."""

    def __init__(self, *, colors: bool = True) -> None:
        super().__init__(colors=colors, level_styles=colored_level_styles() if colors else None, sort_keys=True)

    def _repr(self, val: Any) -> str:
        if isinstance(val, datetime):
            return str(val)
        return super()._repr(val)


class LoggingOutput(IntEnum):
    NULL = auto()
    PRETTY = auto()
    JSON = auto()


class LoggingOptions(NamedTuple):
    output: LoggingOutput
    debug: bool


def extract_logging_options(argv: list[str]) -> LoggingOptions:
    """ Remove the logging flags from `argv` (in place) so commands never see them."""
    parser = create_parser(add_help=False)
    outputs = parser.add_mutually_exclusive_group()
    outputs.add_argument('--json-logs', action='store_true')
    outputs.add_argument('--disable-logs', action='store_true')
    parser.add_argument('--debug', action='store_true')

    args, remaining_argv = parser.parse_known_args(argv)
    argv[:] = remaining_argv

    output = LoggingOutput.PRETTY
    if args.json_logs:
        output = LoggingOutput.JSON
    elif args.disable_logs:
        output = LoggingOutput.NULL
    return LoggingOptions(output=output, debug=args.debug)


def setup_logging(options: LoggingOptions) -> None:
    timestamper = structlog.processors.TimeStamper(fmt='%Y-%m-%d %H:%M:%S')

    # applied to records coming from stdlib loggers
    foreign_pre_chain = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        timestamper,
    ]

    handler: dict[str, Any]
    formatters: dict[str, Any] = {}
    if options.output is LoggingOutput.NULL:
        handler = {'class': 'logging.NullHandler'}
    else:
        renderer = structlog.processors.JSONRenderer() if options.output is LoggingOutput.JSON else ConsoleRenderer()
        handler = {'class': 'logging.StreamHandler', 'formatter': 'structlog'}
        formatters['structlog'] = {
            '()': structlog.stdlib.ProcessorFormatter,
            'processor': renderer,
            'foreign_pre_chain': foreign_pre_chain,
        }

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': formatters,
        'handlers': {'default': handler},
        'root': {
            'handlers': ['default'],
            'level': 'DEBUG' if options.debug else 'INFO',
        },
    })

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.captureWarnings(True)
