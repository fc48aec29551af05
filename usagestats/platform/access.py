"""Per-user operation-mode table backing the usage-access permission."""
import os
import json
from typing import Any, Dict, Optional
from ..models import OpMode


def load_access_table(path: str) -> Dict[str, Any]:
    """
    Load the access table from file.

    A missing file is an empty table. A corrupt one raises, so that the
    caller can report the operation as errored rather than unset.
    """
    if not os.path.exists(path):
        return {}
    with open(path, 'r') as f:
        table = json.load(f)
    if not isinstance(table, dict):
        raise ValueError(f"Access table at {path} is not an object")
    return table


def save_access_table(path: str, table: Dict[str, Any]) -> None:
    """Save the access table to file."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, 'w') as f:
        json.dump(table, f, indent=2)


def lookup_mode(table: Dict[str, Any], op: str, uid: int, package: str) -> OpMode:
    """Resolve the mode of `op` for an identity; a uid-qualified entry wins."""
    modes = table.get(op)
    if not isinstance(modes, dict):
        return OpMode.DEFAULT

    value: Optional[str] = modes.get(f"{uid}:{package}", modes.get(package))
    if value is None:
        return OpMode.DEFAULT
    try:
        return OpMode(value)
    except ValueError:
        return OpMode.ERRORED


def set_mode(path: str, op: str, package: str, mode: OpMode) -> None:
    """Record `mode` for `op` and `package`, keeping other entries."""
    try:
        table = load_access_table(path)
    except ValueError:
        table = {}
    modes = table.get(op)
    if not isinstance(modes, dict):
        modes = {}
    modes[package] = mode.value
    table[op] = modes
    save_access_table(path, table)
