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

from typewire.backends.backend import Backend, RecordEncoder
from typewire.backends.mysql import MySqlBackend
from typewire.backends.postgres import PgRecordEncoder, PostgresBackend
from typewire.exception import UnknownBackendError

POSTGRES = PostgresBackend()
MYSQL = MySqlBackend()

BACKENDS: dict[str, Backend] = {
    POSTGRES.name: POSTGRES,
    MYSQL.name: MYSQL,
}


def get_backend(name: str) -> Backend:
    try:
        return BACKENDS[name]
    except KeyError:
        raise UnknownBackendError(f'unknown backend: {name}') from None


__all__ = [
    'BACKENDS',
    'Backend',
    'MYSQL',
    'MySqlBackend',
    'POSTGRES',
    'PgRecordEncoder',
    'PostgresBackend',
    'RecordEncoder',
    'get_backend',
]
