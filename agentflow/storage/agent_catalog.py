"""In-memory common agent catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..core.exceptions import CommonAgentNotFoundError


@dataclass(frozen=True)
class CommonAgent:
    """Catalog entry for a pre-defined agent."""

    id: str
    name: str
    description: str
    category: str
    icon: str | None = None
    is_active: bool = True


DEFAULT_COMMON_AGENTS: list[tuple[str, str, str, str]] = [
    # (name, description, category, icon)
    ("Email Sender", "Send emails with attachments and custom templates", "Communication", "MailOutlined"),
    ("Slack Notifier", "Send notifications and messages to Slack channels", "Communication", "MessageOutlined"),
    ("SMS Sender", "Send SMS text messages via various providers", "Communication", "MobileOutlined"),
    ("PDF Converter", "Convert various file formats to PDF", "File Conversion", "FilePdfOutlined"),
    ("Word to PDF", "Convert Microsoft Word documents to PDF format", "File Conversion", "FileWordOutlined"),
    ("Excel to CSV", "Convert Excel spreadsheets to CSV format", "File Conversion", "FileExcelOutlined"),
    (
        "Image Converter",
        "Convert images between different formats (PNG, JPG, WebP, etc.)",
        "File Conversion",
        "FileImageOutlined",
    ),
    ("Data Validator", "Validate and clean data against defined rules", "Data Processing", "CheckCircleOutlined"),
    ("JSON Transformer", "Transform and manipulate JSON data structures", "Data Processing", "CodeOutlined"),
    ("CSV Parser", "Parse and process CSV files with various delimiters", "Data Processing", "TableOutlined"),
    ("API Caller", "Make HTTP requests to external APIs", "Web & API", "ApiOutlined"),
    ("Web Scraper", "Extract data from web pages", "Web & API", "GlobalOutlined"),
    ("File Uploader", "Upload files to cloud storage services", "Storage & Database", "CloudUploadOutlined"),
    ("Database Query", "Execute database queries and retrieve data", "Storage & Database", "DatabaseOutlined"),
    ("Text Summarizer", "Summarize long text content into key points", "Utilities", "FileTextOutlined"),
    ("Language Translator", "Translate text between different languages", "Utilities", "TranslationOutlined"),
    ("Report Generator", "Generate formatted reports from data", "Utilities", "BarChartOutlined"),
]


class AgentCatalog:
    """Read-only lookup of common agents by id."""

    def __init__(self, agents: Iterable[CommonAgent] = ()) -> None:
        self._agents: dict[str, CommonAgent] = {agent.id: agent for agent in agents}

    def get(self, agent_id: str | int) -> CommonAgent | None:
        """Get a common agent by ID."""
        return self._agents.get(str(agent_id))

    def require(self, agent_id: str | int) -> CommonAgent:
        """Get a common agent by ID or raise CommonAgentNotFoundError."""
        agent = self.get(agent_id)
        if agent is None:
            raise CommonAgentNotFoundError(str(agent_id))
        return agent

    def list(self, active_only: bool = True) -> list[CommonAgent]:
        """List agents ordered by category, then name."""
        agents = [a for a in self._agents.values() if a.is_active or not active_only]
        return sorted(agents, key=lambda a: (a.category, a.name))


def build_default_catalog() -> AgentCatalog:
    """Catalog seeded with the built-in common agents, ids starting at 1."""
    return AgentCatalog(
        CommonAgent(id=str(index), name=name, description=description, category=category, icon=icon)
        for index, (name, description, category, icon) in enumerate(DEFAULT_COMMON_AGENTS, start=1)
    )


agent_catalog = build_default_catalog()
