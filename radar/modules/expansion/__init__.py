"""Expansion module -- autocomplete-driven keyword discovery."""

from radar.modules.expansion.autocomplete import AutocompleteExpander, Suggestion

__all__ = ["AutocompleteExpander", "Suggestion"]
