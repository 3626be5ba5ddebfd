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

import os
import sys
from types import ModuleType
from typing import NamedTuple, Optional

from structlog import get_logger

logger = get_logger()


class Command(NamedTuple):
    name: str
    group: str
    module: ModuleType
    description: str


class CliManager:
    """ Dispatches `typewire-cli <command> [options]` to the `main()` of the command's module."""

    def __init__(self) -> None:
        self.basename: str = os.path.basename(sys.argv[0])
        self.commands: dict[str, Command] = {}

        from . import check

        self.add_cmd('derive', 'check', check, 'Import a module and report the encode contracts derived in it')

    def add_cmd(self, group: str, cmd: str, module: ModuleType, description: str = '') -> None:
        assert cmd not in self.commands, f'command {cmd} registered twice'
        self.commands[cmd] = Command(cmd, group, module, description)

    def help(self) -> None:
        from colorama import Fore, Style

        width = max((len(name) for name in self.commands), default=0)
        print()
        print('Available subcommands:')
        print()
        for group in sorted({command.group for command in self.commands.values()}):
            print(f'{Fore.RED}{Style.BRIGHT}[{group}]{Style.RESET_ALL}')
            for command in self.commands.values():
                if command.group == group:
                    print(f'    {command.name.ljust(width)}   {command.description}')
            print()

    def execute_from_command_line(self, argv: Optional[list[str]] = None) -> int:
        from typewire.cli.util import extract_logging_options, setup_logging

        if argv is None:
            argv = sys.argv
        if len(argv) < 2 or argv[1] == 'help':
            self.help()
            return 0

        name = argv.pop(1)
        command = self.commands.get(name)
        if command is None:
            print(f'Unknown command: "{name}"')
            print(f'Type "{self.basename} help" for usage.')
            return -1

        argv[0] = f'{argv[0]} {name}'
        setup_logging(extract_logging_options(argv))
        return command.module.main(argv[1:])


def main() -> None:
    try:
        sys.exit(CliManager().execute_from_command_line())
    except KeyboardInterrupt:
        logger.warn('Aborting and exiting...')
        sys.exit(1)
    except Exception:
        logger.exception('Uncaught exception:')
        sys.exit(2)


if __name__ == '__main__':
    main()
