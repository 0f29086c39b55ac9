"""
notifications/diagnostics.py

Operator reports over the relay's token listing: tokens grouped by platform
and likely duplicate devices (same device info on the same platform stored
more than once).
"""
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List

from .relay import as_int

UNKNOWN = "Unknown"
USER_AGENT_PREVIEW = 100


@dataclass(frozen=True)
class TokenRecord:
    user_id: str
    platform: str
    device_info: str
    user_agent: str
    stored_at: str
    token_preview: str

    @property
    def fingerprint(self) -> str:
        return f"{self.device_info}_{self.platform}"

    @classmethod
    def from_relay(cls, raw: dict) -> "TokenRecord":
        return cls(
            user_id=str(raw.get("userId") or "unknown"),
            platform=str(raw.get("platform") or UNKNOWN),
            device_info=str(raw.get("deviceInfo") or "Unknown Device"),
            user_agent=str(raw.get("userAgent") or UNKNOWN),
            stored_at=str(raw.get("storedAt") or UNKNOWN),
            token_preview=str(raw.get("tokenPreview") or "N/A"),
        )


@dataclass
class TokenAnalysis:
    total: int = 0
    platforms: Dict[str, List[TokenRecord]] = field(default_factory=OrderedDict)
    duplicates: Dict[str, List[TokenRecord]] = field(default_factory=OrderedDict)

    def as_dict(self) -> dict:
        def rows(records):
            return [
                {
                    "userId": r.user_id,
                    "platform": r.platform,
                    "deviceInfo": r.device_info,
                    "userAgent": r.user_agent,
                    "storedAt": r.stored_at,
                    "tokenPreview": r.token_preview,
                }
                for r in records
            ]

        return {
            "summary": {"totalTokens": self.total},
            "platforms": {name: rows(records) for name, records in self.platforms.items()},
            "duplicates": {name: rows(records) for name, records in self.duplicates.items()},
        }


def analyze_tokens(debug_data: dict) -> TokenAnalysis:
    debug_data = debug_data or {}
    tokens = [t for t in (debug_data.get("tokens") or []) if isinstance(t, dict)]
    summary = debug_data.get("summary") if isinstance(debug_data.get("summary"), dict) else {}

    platforms = OrderedDict()
    by_device = OrderedDict()
    for raw in tokens:
        record = TokenRecord.from_relay(raw)
        platforms.setdefault(record.platform, []).append(record)
        by_device.setdefault(record.fingerprint, []).append(record)

    return TokenAnalysis(
        total=as_int(summary.get("totalTokens"), default=len(tokens)) or len(tokens),
        platforms=platforms,
        duplicates=OrderedDict((k, v) for k, v in by_device.items() if len(v) > 1),
    )


def _preview(text: str) -> str:
    if len(text) > USER_AGENT_PREVIEW:
        return text[:USER_AGENT_PREVIEW] + "..."
    return text


def render_token_report(analysis: TokenAnalysis) -> str:
    lines = ["=== FCM TOKEN ANALYSIS ===", "", f"Total tokens found: {analysis.total}", ""]
    if not analysis.platforms:
        lines.append("No tokens found in storage.")
        return "\n".join(lines) + "\n"

    for platform, records in analysis.platforms.items():
        lines.append(f"--- {platform} TOKENS ({len(records)}) ---")
        for index, record in enumerate(records, start=1):
            lines.extend([
                f"{index}. User ID: {record.user_id}",
                f"   Device: {record.device_info}",
                f"   Token: {record.token_preview}",
                f"   Registered: {record.stored_at}",
                f"   User Agent: {_preview(record.user_agent)}",
                "",
            ])

    lines.extend(["", "=== POTENTIAL DUPLICATES ==="])
    if not analysis.duplicates:
        lines.append("No duplicate devices detected.")
    for fingerprint, records in analysis.duplicates.items():
        lines.extend(["", f"DUPLICATE GROUP: {fingerprint} ({len(records)} tokens)"])
        for index, record in enumerate(records, start=1):
            lines.append(f"  {index}. {record.user_id} ({record.stored_at})")
            lines.append(f"     Device: {record.device_info}")
    return "\n".join(lines) + "\n"


def render_wipe_report(result) -> str:
    return "\n".join([
        "=== TOKEN WIPE COMPLETE ===",
        "",
        f"Success: {'Yes' if result.success else 'No'}",
        f"Tokens Deleted: {result.deleted}/{result.total}",
        f"Timestamp: {result.timestamp or 'Unknown'}",
        f"Message: {result.message}",
        "",
        "All users will need to re-enable notifications on their devices.",
        "Refresh the debug analysis to verify the wipe was successful.",
    ])
