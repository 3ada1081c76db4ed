"""
Group alerts: payload formatting and Slack webhook delivery.
"""

import json
import logging
import urllib.error
import urllib.request
from typing import Any, Callable, Dict, List, Optional

from .interfaces import AlertPayload
from .issue import Issue, IssueKind
from .records import GroupQualityRecord

logger = logging.getLogger(__name__)

DEFAULT_INSTANCE_URL = "http://localhost:1880"
WEBHOOK_USERNAME = "Node-RED Queue Monitor"
WEBHOOK_ICON = ":warning:"

FallbackCallback = Callable[[str], None]


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def classify_unit_issues(issues: List[Issue]) -> List[str]:
    """Alert lines for one unit, grouped into Critical / Warning / Todo / Info."""
    returns = sum(1 for i in issues if i.kind == IssueKind.TOP_LEVEL_EMPTY_RETURN)
    warns = sum(1 for i in issues if i.kind == IssueKind.HOST_WARN_CALL)
    todos = sum(1 for i in issues if i.kind == IssueKind.TODO_OR_FIXME_COMMENT)
    other = len(issues) - returns - warns - todos

    lines = []
    if returns:
        lines.append(f"**Critical**: {_plural(returns, 'top-level return statement')}")
    if warns:
        lines.append(f"**Warning**: {_plural(warns, 'node.warn() statement')}")
    if todos:
        lines.append(f"**Todo**: {_plural(todos, 'TODO/FIXME comment')}")
    if other:
        lines.append(f"**Info**: {_plural(other, 'minor issue')} (hardcoded values, formatting)")
    return lines


def build_alert_payload(record: GroupQualityRecord, instance_url: Optional[str] = None) -> AlertPayload:
    """Format the code analysis alert for a scanned group."""
    instance_url = instance_url or DEFAULT_INSTANCE_URL
    total = record.total_issues
    affected = record.units_with_issues

    units: List[Dict[str, Any]] = []
    for unit in record.unit_records:
        lines = classify_unit_issues(unit.issues)
        if lines:
            units.append({"name": unit.unit_name, "total_issues": unit.issue_count, "issues": lines})

    needs = "needs" if affected == 1 else "need"
    text = f"⚠️ **Code Analysis Alert - {_plural(total, 'Issue')} Found**\n\n"
    text += f"**Summary**: {_plural(affected, 'function node')} in flow \"{record.group_name}\" {needs} attention\n\n"
    for unit in units:
        text += f"**{unit['name']}** ({_plural(unit['total_issues'], 'issue')})\n"
        for line in unit["issues"]:
            text += f"   {line}\n"
        text += "\n"
    text += "**Recommended Action**: Review and clean up debugging code before production deployment\n\n"
    text += f"**Node-RED Instance**: {instance_url}"

    return AlertPayload(
        group_id=record.group_id,
        group_name=record.group_name,
        total_issues=total,
        affected_units=affected,
        text=text,
        units=units,
        instance_url=instance_url,
    )


class SlackNotifier:
    """Posts alert text to a Slack incoming webhook.

    Without a webhook URL, or when delivery fails, the message is handed to
    ``fallback`` (if given) instead.
    """

    def __init__(self, webhook_url: Optional[str] = None, fallback: Optional[FallbackCallback] = None, timeout: float = 10):
        self.webhook_url = webhook_url
        self.fallback = fallback
        self.timeout = timeout

    def webhook_body(self, message: str) -> Dict[str, str]:
        return {"text": message, "username": WEBHOOK_USERNAME, "icon_emoji": WEBHOOK_ICON}

    def send_message(self, message: str, fallback: Optional[FallbackCallback] = None) -> bool:
        fallback = fallback or self.fallback
        if not self.webhook_url:
            logger.info("No Slack webhook configured; alert not sent")
            if fallback:
                fallback(message)
            return False

        request = urllib.request.Request(
            self.webhook_url,
            data=json.dumps(self.webhook_body(message)).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                response.read()
        except (urllib.error.URLError, OSError, ValueError) as exc:
            logger.error("Failed to send Slack message: %s", exc)
            if fallback:
                fallback(message)
            return False
        return True

    def send(self, payload: Dict[str, Any]) -> bool:
        return self.send_message(str(payload.get("text", "")))

    def send_code_analysis_alert(self, record: GroupQualityRecord, instance_url: Optional[str] = None) -> bool:
        return self.send_message(build_alert_payload(record, instance_url).text)
