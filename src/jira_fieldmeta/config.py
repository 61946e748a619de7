from __future__ import annotations

from dataclasses import dataclass
import getpass
import json
from pathlib import Path
import sys
from typing import Any, Callable, TextIO

from colorama import Fore, Style
import yaml

from .errors import ConfigurationError


REST_ENDPOINT = "/rest/api/2"
CREATEMETA_PATH = "/issue/createmeta?expand=projects.issuetypes.fields"
REQUIRED_KEYS = ("username", "password", "site_url")


@dataclass
class Credentials:
    username: str
    password: str
    site_url: str

    @property
    def api_base(self) -> str:
        return self.site_url.rstrip("/") + REST_ENDPOINT

    @property
    def createmeta_url(self) -> str:
        return self.api_base + CREATEMETA_PATH


def _load_document(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"couldn't read supplied creds file: {path}: {exc}") from exc
    try:
        return json.loads(text)
    except ValueError:
        pass
    # YAML fallback; tab-indented JSON only parses via json.loads.
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"couldn't parse creds file: {path}: {exc}") from exc


def load_credentials(path: str) -> Credentials:
    """Load ``username``, ``password`` and ``site_url`` from a JSON (or YAML) file."""
    creds_path = Path(path)
    if not creds_path.is_file():
        raise ConfigurationError(f"supplied creds file does not exist: {path}")
    raw = _load_document(creds_path)
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Creds file must be a mapping: {path}")
    values = {key: raw.get(key) for key in REQUIRED_KEYS}
    if any(not isinstance(v, str) or not v for v in values.values()):
        raise ConfigurationError("creds file missing at least one of username, password, or site_url values")
    return Credentials(**values)


def prompt_credentials(
    input_fn: Callable[[], str] | None = None,
    password_fn: Callable[[str], str] = getpass.getpass,
    output: TextIO | None = None,
) -> Credentials:
    input_fn = input_fn or sys.stdin.readline
    out = output or sys.stderr

    def ask(label: str) -> None:
        out.write(f"{Fore.BLUE}{label}{Style.RESET_ALL}")
        out.flush()

    try:
        ask("Enter JIRA username: ")
        username = input_fn().rstrip("\r\n")
        password = password_fn(f"{Fore.BLUE}Enter JIRA password: {Style.RESET_ALL}").rstrip("\r\n")
        ask("Enter JIRA base URL: ")
        site_url = input_fn().rstrip("\r\n").rstrip("/")
    except (EOFError, KeyboardInterrupt) as exc:
        raise ConfigurationError("credential prompt aborted before all values were entered") from exc

    if not username or not password or not site_url:
        raise ConfigurationError("username, password and base URL are all required")
    return Credentials(username=username, password=password, site_url=site_url)
