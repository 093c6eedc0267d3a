"""
Export profile: connection, default query/format and output settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from sqlexport.export.settings import OutputSettings, normalize_key

DEFAULT_COMMAND_TIMEOUT = 30


@dataclass(frozen=True)
class NotificationSettings:
    """SMTP settings for error notification mails."""

    enabled: bool = False
    smtp_host: str = "localhost"
    smtp_port: int = 25
    use_tls: bool = False
    username: str = ""
    password: str = ""
    sender: str = ""
    recipients: tuple[str, ...] = ()
    subject_prefix: str = "[sqlexport]"
    timeout: float = 30.0

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> NotificationSettings:
        if not d:
            return cls()
        known = {f.name for f in fields(cls)}
        values = {normalize_key(str(k)): v for k, v in d.items()}
        values = {k: v for k, v in values.items() if k in known}
        recipients = values.get("recipients")
        if isinstance(recipients, str):
            values["recipients"] = tuple(r.strip() for r in recipients.split(",") if r.strip())
        elif recipients is not None:
            values["recipients"] = tuple(recipients)
        return cls(**values)


@dataclass
class Profile:
    """
    A named export profile.

    The data source is described either by ``connection`` (a mapping with a
    ``type`` such as duckdb, mssql, postgres) or by ``connection_string``
    (a URL accepted by ``ibis.connect``, or an ADO.NET style SQL Server
    ``Server=...;Database=...`` string).
    """

    name: str
    connection: dict[str, Any] = field(default_factory=dict)
    connection_string: str = ""
    query: str = ""
    format: str = ""
    output_directory: str = ""
    output_properties: OutputSettings = field(default_factory=OutputSettings)
    command_timeout: int | None = DEFAULT_COMMAND_TIMEOUT
    notifications: NotificationSettings = field(default_factory=NotificationSettings)

    @property
    def timeout(self) -> int | None:
        """Command timeout in seconds; unset means the default, 0 means no limit."""
        if self.command_timeout == 0:
            return None
        return self.command_timeout or DEFAULT_COMMAND_TIMEOUT

    @property
    def connection_info(self) -> dict[str, Any]:
        """Connection description handed to the data source."""
        if self.connection:
            return dict(self.connection)
        if self.connection_string:
            return {"type": "url", "url": self.connection_string}
        return {}

    @classmethod
    def from_dict(cls, d: dict[str, Any], name: str | None = None) -> Profile:
        """
        Create a Profile from a mapping.

        Keys may be snake_case or the legacy PascalCase (``ConnectionString``,
        ``OutputProperties``, ``CommandTimeout``); unknown keys are ignored.
        """
        values = {normalize_key(str(k)): v for k, v in d.items()}
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in values.items() if k in known}

        values["name"] = values.get("name") or name or ""
        values["connection"] = dict(values.get("connection") or {})
        values["output_properties"] = OutputSettings.from_dict(values.get("output_properties"))
        values["notifications"] = NotificationSettings.from_dict(values.get("notifications"))
        if values.get("command_timeout") is not None:
            values["command_timeout"] = int(values["command_timeout"])
        for key in ("connection_string", "query", "format", "output_directory"):
            if values.get(key) is None:
                values.pop(key, None)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Mapping suitable for writing a profile file."""
        settings = self.output_properties
        data: dict[str, Any] = {"name": self.name}
        if self.connection:
            data["connection"] = dict(self.connection)
        if self.connection_string:
            data["connection_string"] = self.connection_string
        data.update(
            {
                "query": self.query,
                "format": self.format,
                "output_directory": self.output_directory,
                "command_timeout": self.command_timeout,
                "output_properties": {
                    "csv": {
                        "header": settings.csv.header,
                        "separator": settings.csv.separator,
                        "decimal": settings.csv.decimal,
                    },
                    "xml": {
                        "append_header": settings.xml.append_header,
                        "root_node": settings.xml.root_node,
                        "row_node": settings.xml.row_node,
                    },
                    "json": {"write_indented": settings.json.write_indented},
                    "yaml": {
                        "include_header": settings.yaml.include_header,
                        "indentation_level": settings.yaml.indentation_level,
                        "emit_defaults": settings.yaml.emit_defaults,
                    },
                },
                "notifications": {
                    "enabled": self.notifications.enabled,
                    "smtp_host": self.notifications.smtp_host,
                    "smtp_port": self.notifications.smtp_port,
                    "recipients": list(self.notifications.recipients),
                },
            }
        )
        return data
