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

import importlib
import os
import sys
from typing import Optional

from structlog import get_logger

logger = get_logger()


def main(argv: Optional[list[str]] = None) -> int:
    from typewire.cli.util import create_parser
    from typewire.conf.get_settings import CONFIG_YAML_ENV_VAR
    from typewire.derive.driver import get_derived, is_derived
    from typewire.exception import ShapeError, UnresolvedMemberEncodingError

    parser = create_parser()
    parser.add_argument('module', help='Dotted name of the module to check, it is imported from the current directory')
    parser.add_argument('--config-yaml', help='Settings file to use instead of the defaults')
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.config_yaml:
        os.environ[CONFIG_YAML_ENV_VAR] = args.config_yaml

    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())

    try:
        module = importlib.import_module(args.module)
    except (ShapeError, UnresolvedMemberEncodingError) as e:
        logger.error('encode derivation failed', module=args.module)
        print(f'error: {e}')
        return 1

    derived_types = [
        value for value in vars(module).values()
        if is_derived(value) and value.__module__ == module.__name__
    ]
    if not derived_types:
        print(f'no derived types found in {args.module}')
        return 0

    for cls in derived_types:
        derived = get_derived(cls)
        strategy = type(derived.strategy).__name__
        if derived.type_def.is_generic:
            backends = 'generated per instantiation'
        else:
            backends = ', '.join(derived.generated_backends()) or 'none'
        print(f'{derived.type_def.name}: {strategy} ({backends})')

    return 0
