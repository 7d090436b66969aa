"""Result formatting for the web API and command line."""

from .result_builder import prepare_results

__all__ = ["prepare_results"]
