"""Coverage mapper -- matches keywords to existing sub-apps and suggests internal links."""

from dataclasses import dataclass
from typing import Optional

from radar.utils.text_processing import contains_any

SITE_ROOT = "https://austin-texas.net/"
MAX_INTERNAL_LINKS = 3


@dataclass(frozen=True)
class AppMapping:
    slug: str
    domain: str
    patterns: tuple[str, ...]

    @property
    def url(self) -> str:
        return f"https://{self.domain}"


@dataclass(frozen=True)
class CoverageMatch:
    app: str
    domain: str
    url: Optional[str]


# Ordered; the first mapping with a contained pattern wins.
APP_MAPPINGS: tuple[AppMapping, ...] = (
    AppMapping("food-trucks", "food-trucks.atx-apps.com", ("food truck", "food trailer")),
    AppMapping("breakfast-tacos", "breakfast-tacos.atx-apps.com",
               ("breakfast taco", "breakfast burrito", "morning taco")),
    AppMapping("happy-hours", "happy-hours.atx-apps.com", ("happy hour", "drink special", "drink deal")),
    AppMapping("crawfish-boils", "crawfish-boils.atx-apps.com", ("crawfish", "crayfish", "crawdad")),
    AppMapping("live-music", "live-music.atx-apps.com",
               ("live music", "music venue", "concert", "band tonight", "open mic")),
    AppMapping("bat-bridge", "bat-bridge.atx-apps.com",
               ("bat bridge", "congress bridge bat", "bat colony", "bat watching")),
    AppMapping("bluebonnets", "bluebonnets.atx-apps.com",
               ("bluebonnet", "wildflower", "bluebonnet field", "bluebonnet photo")),
    AppMapping("austin-cedar-pollen", "austin-cedar-pollen.atx-apps.com",
               ("cedar pollen", "cedar fever", "cedar allergy", "juniper pollen", "cedar count")),
    AppMapping("oak-pollen", "oak-pollen.atx-apps.com", ("oak pollen", "oak allergy", "oak tree pollen")),
    AppMapping("water-temps", "water-temps.atx-apps.com",
               ("water temperature", "water temp", "swim temperature", "lake temperature",
                "barton springs temp")),
    AppMapping("rent-heatmap", "rent-heatmap.atx-apps.com",
               ("rent", "apartment", "rental", "lease", "studio apartment", "rent price")),
    AppMapping("disc-golf", "disc-golf.atx-apps.com", ("disc golf", "frisbee golf", "disc golf course")),
    AppMapping("chicken-shit-bingo", "chicken-shit-bingo.atx-apps.com", ("chicken shit bingo", "chicken bingo")),
    AppMapping("rodeo-austin", "rodeo-austin.atx-apps.com",
               ("rodeo", "rodeo austin", "star of texas rodeo", "bull riding")),
    AppMapping("street-art", "street-art.atx-apps.com",
               ("street art", "mural", "graffiti", "wall art", "hope outdoor")),
    AppMapping("kayak-launches", "kayak-launches.atx-apps.com",
               ("kayak", "canoe", "kayak launch", "paddle", "kayak rental")),
    AppMapping("haunted-austin", "haunted-austin.atx-apps.com",
               ("haunted", "ghost tour", "paranormal", "scary", "halloween")),
    AppMapping("hoods", "hoods.atx-apps.com",
               ("neighborhood", "best neighborhood", "neighborhood guide", "area guide")),
    AppMapping("great-hills-restaurants", "great-hills-restaurants.atx-apps.com",
               ("great hills", "arboretum restaurant")),
    AppMapping("austin-texas-net", "austin-texas.net",
               ("things to do", "travel guide", "visitor guide", "weekend in austin", "moving to austin")),
)

# Broader topical words that make an app worth linking even without a direct match.
TOPIC_OVERLAP: dict[str, tuple[str, ...]] = {
    "food-trucks": ("food", "eat", "restaurant", "taco", "bbq"),
    "live-music": ("music", "concert", "band", "festival", "sxsw"),
    "bluebonnets": ("flower", "spring", "nature", "wildflower"),
    "kayak-launches": ("kayak", "canoe", "paddle", "lake", "river"),
    "rent-heatmap": ("apartment", "rent", "housing", "living"),
}


def match_to_existing_content(keyword: str) -> Optional[CoverageMatch]:
    """Return the app already serving this keyword, or None for a coverage gap."""
    lc = keyword.lower()
    for mapping in APP_MAPPINGS:
        if contains_any(lc, mapping.patterns):
            return CoverageMatch(app=mapping.slug, domain=mapping.domain, url=mapping.url)
    return None


def suggest_internal_links(keyword: str, exclude_app: Optional[str] = None) -> list[str]:
    """Collect up to three distinct app links relevant to the keyword.

    Falls back to the site root when nothing topical matches.
    """
    lc = keyword.lower()
    links: list[str] = []
    for mapping in APP_MAPPINGS:
        if mapping.slug == exclude_app:
            continue
        topical = contains_any(lc, mapping.patterns) or contains_any(lc, TOPIC_OVERLAP.get(mapping.slug, ()))
        if topical and mapping.url not in links:
            links.append(mapping.url)
        if len(links) >= MAX_INTERNAL_LINKS:
            break
    return links or [SITE_ROOT]
