from __future__ import annotations

import argparse
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cguide.rendering.render import FORMATS

ENV_PREFIX = "CGUIDE_"
MIN_WIDTH = 20


@dataclass
class DocsConfig:
    extra_dirs: list[str] = field(default_factory=list)


@dataclass
class RenderConfig:
    format: str = "text"
    width: int = 80
    full_page: bool = False


@dataclass
class ServeConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class LoggingConfig:
    quiet: bool = False
    verbose: bool = False
    log_file: str | None = None


@dataclass
class Config:
    config_path: str | None = None

    docs: DocsConfig = field(default_factory=DocsConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    serve: ServeConfig = field(default_factory=ServeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cguide", description="Reader for the bundled C style and security guides")
    p.add_argument("--config", dest="config_path")
    p.add_argument("--docs-dir", action="append", help="Extra directory of *.md guides (repeatable)")
    p.add_argument("--quiet", action="store_true")
    p.add_argument("--verbose", action="store_true")
    p.add_argument("--log-file")

    sub = p.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    ls = sub.add_parser("list", help="Print the available document names")
    ls.add_argument("--long", action="store_true", help="Show a table with titles and block counts")

    show = sub.add_parser("show", help="Render one document to stdout")
    show.add_argument("name")
    show.add_argument("--format", choices=FORMATS)
    show.add_argument("--width", type=int)
    show.add_argument("--full-page", action="store_true", default=None, help="Wrap HTML output in a standalone page")

    toc = sub.add_parser("toc", help="Print the heading outline of a document")
    toc.add_argument("name")

    snip = sub.add_parser("snippets", help="Print the code snippets of a document verbatim")
    snip.add_argument("name")
    snip.add_argument("--lang")

    search = sub.add_parser("search", help="Find a term across all documents")
    search.add_argument("term")

    export = sub.add_parser("export", help="Write every rendered document into a directory")
    export.add_argument("out_dir")
    export.add_argument("--format", choices=["text", "html", "markdown"])
    export.add_argument("--width", type=int)
    export.add_argument("--overwrite", action="store_true")

    serve = sub.add_parser("serve", help="Serve the documents over HTTP")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)

    return p


def _deep_update(dst: dict[str, Any], src: dict[str, Any]) -> dict[str, Any]:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _deep_update(dst[k], v)
        else:
            dst[k] = v
    return dst


def _discover_config_path() -> Path | None:
    candidates = [
        Path("./cguide.toml"),
        Path("./.cguide.toml"),
        Path.home() / ".config" / "cguide" / "config.toml",
    ]
    for c in candidates:
        if c.exists():
            return c
    return None


def _load_toml(path: Path | None) -> dict[str, Any]:
    if not path:
        return {}
    if not path.exists():
        raise ValueError(f"Config file does not exist: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {path}: {e}") from e


def _parse_env_value(raw: str) -> Any:
    low = raw.lower()
    if low in {"true", "false"}:
        return low == "true"
    try:
        if "." in raw:
            return float(raw)
        return int(raw)
    except ValueError:
        if "," in raw:
            return [x.strip() for x in raw.split(",") if x.strip()]
        return raw


def _load_env_overrides() -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in os.environ.items():
        if not k.startswith(ENV_PREFIX):
            continue
        key = k[len(ENV_PREFIX) :].lower()
        parts = key.split("__")
        cur = out
        for part in parts[:-1]:
            cur = cur.setdefault(part, {})
        cur[parts[-1]] = _parse_env_value(v)
    return out


def _apply_cli_overrides(data: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    cli: dict[str, Any] = {}

    def sec(section: str) -> dict[str, Any]:
        return cli.setdefault(section, {})

    mapping = {
        ("docs", "extra_dirs"): getattr(args, "docs_dir", None),
        ("render", "format"): getattr(args, "format", None),
        ("render", "width"): getattr(args, "width", None),
        ("render", "full_page"): getattr(args, "full_page", None),
        ("serve", "host"): getattr(args, "host", None),
        ("serve", "port"): getattr(args, "port", None),
        ("logging", "log_file"): getattr(args, "log_file", None),
    }
    for (s, k), v in mapping.items():
        if v is not None:
            sec(s)[k] = v

    if getattr(args, "quiet", False):
        sec("logging")["quiet"] = True
    if getattr(args, "verbose", False):
        sec("logging")["verbose"] = True

    _deep_update(data, cli)
    return data


def _section(d: dict[str, Any], name: str) -> dict[str, Any]:
    value = d.get(name, {})
    if not isinstance(value, dict):
        raise ValueError(f"[{name}] must be a table")
    return value


def _from_dict(d: dict[str, Any]) -> Config:
    try:
        return Config(
            config_path=d.get("config_path"),
            docs=DocsConfig(**_section(d, "docs")),
            render=RenderConfig(**_section(d, "render")),
            serve=ServeConfig(**_section(d, "serve")),
            logging=LoggingConfig(**_section(d, "logging")),
        )
    except TypeError as e:
        raise ValueError(f"Unknown config key: {e}") from e


def _require_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def _require_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def _require_str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {value!r}")
    return value


def _extra_dirs(value: Any) -> list[str]:
    # A single env value arrives as a scalar; a numeric directory name parses as int.
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        return [str(value)]
    if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
        raise ValueError(f"docs.extra_dirs must be a list of paths, got {value!r}")
    return value


def _validate(cfg: Config) -> None:
    cfg.docs.extra_dirs = _extra_dirs(cfg.docs.extra_dirs)

    _require_str(cfg.render.format, "render.format")
    if cfg.render.format not in FORMATS:
        raise ValueError(f"render.format must be one of {'|'.join(FORMATS)}")
    if _require_int(cfg.render.width, "render.width") < MIN_WIDTH:
        raise ValueError(f"render.width must be >= {MIN_WIDTH}")
    _require_bool(cfg.render.full_page, "render.full_page")

    _require_str(cfg.serve.host, "serve.host")
    if not 1 <= _require_int(cfg.serve.port, "serve.port") <= 65535:
        raise ValueError("serve.port must be between 1 and 65535")

    _require_bool(cfg.logging.quiet, "logging.quiet")
    _require_bool(cfg.logging.verbose, "logging.verbose")
    if cfg.logging.log_file is not None:
        _require_str(cfg.logging.log_file, "logging.log_file")


def resolve_config(args: argparse.Namespace) -> Config:
    data: dict[str, Any] = {}

    config_path = Path(args.config_path) if getattr(args, "config_path", None) else _discover_config_path()
    if config_path:
        _deep_update(data, _load_toml(config_path))
        data["config_path"] = str(config_path)

    _deep_update(data, _load_env_overrides())
    _apply_cli_overrides(data, args)

    cfg = _from_dict(data)
    _validate(cfg)
    return cfg
