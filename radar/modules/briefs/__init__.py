"""Briefs module -- advisory content briefs for keywords."""

from radar.modules.briefs.generator import BriefService, ContentBrief, generate_brief

__all__ = ["BriefService", "ContentBrief", "generate_brief"]
