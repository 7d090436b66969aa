"""
Artifact JSON processing using streaming parser.
"""

import ijson
from typing import Any, Dict

from ..core.providers import ArtifactFormatError


KNOWN_SECTIONS = (
    'url',
    'gatherMode',
    'traceEnd',
    'tasks',
    'firstContentfulPaint',
    'interactive',
    'totalBlockingTime',
)


class TraceArtifactProcessor:
    """Reads precomputed trace artifacts (tasks, milestones, TBT) from JSON files."""

    @staticmethod
    def process_file(file_path: str) -> Dict[str, Any]:
        """
        Process an artifact JSON file into its top-level sections.

        Unknown sections are skipped.

        Args:
            file_path: Path to the artifact JSON file

        Returns:
            Dictionary mapping section name -> parsed value
        """
        artifact: Dict[str, Any] = {}

        print(f"Processing {file_path}...")

        with open(file_path, 'rb') as f:
            try:
                for key, value in ijson.kvitems(f, '', use_float=True):
                    if key not in KNOWN_SECTIONS:
                        continue
                    artifact[key] = value
                    if key == 'tasks':
                        print(f"  Read {len(value)} tasks")
            except ijson.JSONError as e:
                raise ArtifactFormatError(f"Invalid artifact JSON in {file_path}: {e}") from e

        if 'totalBlockingTime' in artifact:
            mode = 'simulated' if 'pessimisticEstimate' in artifact['totalBlockingTime'] else 'observed'
            print(f"Completed reading file: {mode} blocking time.")
        else:
            print("Completed reading file.")

        return artifact
