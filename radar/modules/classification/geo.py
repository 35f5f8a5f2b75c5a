"""Geo filter -- decides whether a keyword targets the Greater Austin area."""

from radar.utils.text_processing import contains_any

# Dominant geography token; autocomplete discoveries must still contain it.
PRIMARY_GEO_TOKEN = "austin"

AUSTIN_GEO_TOKENS: tuple[str, ...] = (
    "austin", "atx",
    "south congress", "soco", "east austin", "south austin", "north austin",
    "west austin", "downtown austin", "zilker", "barton springs", "barton creek",
    "mueller", "domain", "rainey street", "rainey", "6th street", "sixth street",
    "south lamar", "north loop", "hyde park", "tarrytown", "clarksville",
    "bouldin", "travis heights", "east cesar chavez", "montopolis",
    "crestview", "allandale", "rosedale", "brentwood", "windsor park",
    "university hills", "dove springs", "onion creek", "circle c",
    "great hills", "arboretum", "jollyville", "balcones",
    "round rock", "cedar park", "pflugerville", "lakeway", "bee cave",
    "bee caves", "west lake hills", "westlake", "lago vista",
    "leander", "liberty hill", "georgetown", "hutto", "taylor",
    "kyle", "buda", "dripping springs", "manor", "elgin",
    "bastrop", "smithville", "wimberley", "san marcos",
    "lake travis", "lake austin", "lady bird lake", "town lake",
    "barton springs pool", "deep eddy", "hamilton pool",
    "mckinney falls", "mount bonnell", "mt bonnell", "pennybacker",
    "congress bridge", "bat bridge", "greenbelt",
    "travis county", "williamson county", "hays county",
)

# Competing locations. Checked first: any hit excludes the keyword.
EXCLUDED_GEO_TOKENS: tuple[str, ...] = (
    "california", "florida", "new york", "ohio", "georgia",
    "colorado", "arizona", "illinois", "michigan", "virginia",
    "washington state", "oregon", "nevada", "minnesota",
    "north carolina", "south carolina", "tennessee", "alabama",
    "louisiana", "maryland", "indiana", "missouri", "wisconsin",
    "massachusetts", "new jersey", "pennsylvania", "connecticut",
    "dallas tx", "houston tx", "san antonio tx",
    "chicago", "los angeles", "new york city", "nyc", "miami",
    "denver", "seattle", "portland", "phoenix", "atlanta",
    "nashville", "boston", "detroit", "san francisco", "sf",
    "las vegas",
)


def is_in_scope(keyword: str) -> bool:
    """Return True when the keyword is about the Austin metro.

    Plain substring containment after case-folding; the deny list wins
    over the allow list, so "austin vs denver" is out of scope.
    """
    lc = keyword.lower().strip()
    if contains_any(lc, EXCLUDED_GEO_TOKENS):
        return False
    return contains_any(lc, AUSTIN_GEO_TOKENS)
