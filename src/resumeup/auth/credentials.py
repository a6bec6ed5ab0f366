"""
Credential storage for resumeup.

Loads the client identity and OAuth2 token pair from a KEY=VALUE .env
file and rewrites that file whenever the token pair changes.
"""

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from dotenv import dotenv_values
from dotenv.parser import parse_stream


REQUIRED_KEYS = ["CLIENT_ID", "CLIENT_SECRET", "ACCESS_TOKEN", "REFRESH_TOKEN"]


@dataclass(frozen=True)
class TokenPair:
    """OAuth2 access/refresh tokens, always replaced together."""
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class ClientIdentity:
    """OAuth2 application identity."""
    client_id: str
    client_secret: str


@dataclass
class Credentials:
    """Everything read from the .env file."""
    identity: ClientIdentity
    tokens: TokenPair
    extra: Dict[str, str] = field(default_factory=dict)


def quote_value(value: str) -> str:
    """Double-quote a value the way python-dotenv reads it back."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class CredentialStore:
    """
    KEY=VALUE credential file backed by python-dotenv.

    save() only touches the ACCESS_TOKEN and REFRESH_TOKEN entries; every
    other line (other keys, quoting, comments, blank lines) is written
    back exactly as it was read.
    """

    def __init__(self, path: str = ".env"):
        self.path = Path(path)

    def load(self) -> Credentials:
        """
        Read credentials from disk.

        Returns:
            Credentials with identity, tokens and the remaining keys

        Raises:
            FileNotFoundError: If the credential file doesn't exist
            ValueError: If a required key is missing or empty
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Credential file not found: {self.path}")

        raw = dotenv_values(self.path)

        missing = [key for key in REQUIRED_KEYS if not raw.get(key)]
        if missing:
            raise ValueError(
                f"Missing required credential(s) in {self.path}: {', '.join(missing)}"
            )

        values = {key: (value or "") for key, value in raw.items()}

        return Credentials(
            identity=ClientIdentity(
                client_id=values["CLIENT_ID"],
                client_secret=values["CLIENT_SECRET"],
            ),
            tokens=TokenPair(
                access_token=values["ACCESS_TOKEN"],
                refresh_token=values["REFRESH_TOKEN"],
            ),
            extra={
                key: value
                for key, value in values.items()
                if key not in REQUIRED_KEYS
            },
        )

    def save(self, tokens: TokenPair) -> None:
        """
        Persist a new token pair, rewriting the whole file in one write.

        Args:
            tokens: Token pair issued by the last refresh

        Raises:
            IOError: If file cannot be read or written
        """
        new_values = {
            "ACCESS_TOKEN": tokens.access_token,
            "REFRESH_TOKEN": tokens.refresh_token,
        }

        text = self.path.read_text(encoding="utf-8") if self.path.exists() else ""

        chunks: List[str] = []
        written = set()
        for binding in parse_stream(io.StringIO(text)):
            if binding.key in new_values:
                # Duplicate token entries collapse into the first one
                if binding.key not in written:
                    chunks.append(f"{binding.key}={quote_value(new_values[binding.key])}\n")
                    written.add(binding.key)
                continue
            chunks.append(binding.original.string)

        if chunks and not chunks[-1].endswith("\n"):
            chunks[-1] += "\n"

        for key, value in new_values.items():
            if key not in written:
                chunks.append(f"{key}={quote_value(value)}\n")

        # Single writer, truncate-then-write is enough
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("".join(chunks))
            f.flush()
