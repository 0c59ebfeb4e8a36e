"""JSON scan report writer.

The report only carries masked values: neither the raw match nor the
regex source of a pattern is ever written.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

    from config_warden.core.models import ScanResult, SecretMatch


@dataclass
class JSONFinding:
    """JSON representation of a secret match.

    Attributes:
        file: Path of the file, relative to the run root.
        line: Line number in the file.
        column: Column of the match start.
        patternName: Name of the matched pattern.
        maskedMatch: Masked secret value.
    """

    file: str
    line: int
    column: int
    patternName: str  # noqa: N815
    maskedMatch: str  # noqa: N815


class JSONReporter:
    """JSON reporter for scan results.

    Example:
        ```python
        reporter = JSONReporter()
        reporter.write(result, Path("secrets-report.json"))
        ```
    """

    def _match_to_finding(self, match: SecretMatch) -> JSONFinding:
        return JSONFinding(
            file=match.file,
            line=match.line,
            column=match.column,
            patternName=match.pattern_name,
            maskedMatch=match.masked_match,
        )

    def generate(
        self,
        result: ScanResult,
        timestamp: datetime | None = None,
    ) -> dict[str, Any]:
        """Generate the report structure.

        Args:
            result: Scan result to report.
            timestamp: Report time (defaults to now, UTC).

        Returns:
            JSON structure as a dictionary.
        """
        timestamp = timestamp or datetime.now(UTC)
        return {
            "timestamp": timestamp.isoformat(),
            "summary": {
                "totalFiles": result.total_files,
                "scannedFiles": result.scanned_files,
                "secretsFound": result.secrets_count,
                "hasSecrets": result.has_secrets,
            },
            "secrets": [asdict(self._match_to_finding(m)) for m in result.matches],
        }

    def generate_json(self, result: ScanResult, pretty: bool = True) -> str:
        """Generate the report as a JSON string."""
        data = self.generate(result)
        if pretty:
            return json.dumps(data, indent=2, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)

    def write(self, result: ScanResult, output_path: Path, pretty: bool = True) -> None:
        """Write the report to a file.

        Args:
            result: Scan result to report.
            output_path: Path to write the JSON file.
            pretty: Whether to format the JSON with indentation.
        """
        output_path.write_text(self.generate_json(result, pretty), encoding="utf-8")


def create_json_reporter() -> JSONReporter:
    """Create a JSON reporter."""
    return JSONReporter()
