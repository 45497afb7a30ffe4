from __future__ import annotations

import json
from pathlib import Path

from miniship.core.result import Err, Ok, Result
from miniship.core.structured import as_str_dict, get_int, get_list
from miniship.platform.files import atomic_write_text
from miniship.services.release.errors import ReleaseError
from miniship.services.release.model import ReleaseSet
from miniship.services.release.packages import parse_package_refs, release_set

RELEASE_FILE_SCHEMA = 1


def write_release_file(*, path: Path, packages: ReleaseSet) -> Result[None, ReleaseError]:
    payload: dict[str, object] = {
        "schema": RELEASE_FILE_SCHEMA,
        "packages": [str(p) for p in packages],
    }

    try:
        atomic_write_text(path, json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to write release file: {e}",
                hint=str(path),
            )
        )

    return Ok(None)


def read_release_file(*, path: Path) -> Result[ReleaseSet, ReleaseError]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to read release file: {e}",
                hint=str(path),
            )
        )

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"invalid JSON in release file: {e}",
                hint=str(path),
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message="release file root must be a JSON object",
                hint=str(path),
            )
        )

    schema = get_int(data, "schema")
    if schema != RELEASE_FILE_SCHEMA:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"unsupported release file schema: {schema}",
                hint=str(path),
            )
        )

    items = get_list(data, "packages")
    if items is None or not all(isinstance(i, str) for i in items):
        return Err(
            ReleaseError(
                kind="invalid_input",
                message="packages must be a list of package strings",
                hint=str(path),
            )
        )

    refs = parse_package_refs(str(i) for i in items)
    if isinstance(refs, Err):
        return refs
    return release_set(refs.value)
