"""Register this server in the Claude desktop client's configuration file."""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Optional


def default_config_path() -> Path:
    """Location of claude_desktop_config.json for the current platform."""
    if sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "Claude" / "claude_desktop_config.json"


def server_entry() -> dict:
    """Launch command for this server, using the current interpreter."""
    return {"command": sys.executable, "args": ["-m", "conversation_memory"]}


def register_server(config_path: Path, name: str) -> dict:
    """
    Add or replace ``mcpServers[name]`` in the desktop config.

    Raises:
        OSError: If the file cannot be read or written
        ValueError: If the file is not a JSON object
    """
    config = json.loads(config_path.read_text(encoding="utf-8"))
    if not isinstance(config, dict):
        raise ValueError(f"{config_path} does not contain a JSON object")

    servers = config.setdefault("mcpServers", {})
    servers[name] = server_entry()

    config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return servers[name]


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Add the conversation-memory server to the Claude desktop config"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to claude_desktop_config.json (default: platform location)",
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Server key in mcpServers (default: current directory name)",
    )
    args = parser.parse_args(argv)

    config_path = args.config or default_config_path()
    name = args.name or Path.cwd().name

    try:
        entry = register_server(config_path, name)
    except (OSError, ValueError) as e:
        print(f"❌ Error updating Claude desktop config: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"✅ Successfully updated Claude desktop config at {config_path}")
    print(f"   Added server: {name} with command: {entry['command']} {' '.join(entry['args'])}")


if __name__ == "__main__":
    main()
