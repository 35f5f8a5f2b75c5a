"""Built-in seed keyword list and topical buckets."""

from dataclasses import dataclass

BUCKETS: tuple[str, ...] = (
    "food", "outdoors", "places", "events", "neighborhoods", "housing", "weather",
)


@dataclass(frozen=True)
class SeedKeyword:
    keyword: str
    bucket: str
    estimated_volume: int


SEED_KEYWORDS: tuple[SeedKeyword, ...] = (
    # Food & Drink
    SeedKeyword("austin restaurants", "food", 33100),
    SeedKeyword("austin tacos", "food", 12100),
    SeedKeyword("austin bbq", "food", 18100),
    SeedKeyword("austin happy hour", "food", 6600),
    SeedKeyword("austin food trucks", "food", 8100),
    SeedKeyword("austin brunch", "food", 9900),
    SeedKeyword("austin coffee shops", "food", 5400),
    SeedKeyword("austin breakfast tacos", "food", 4400),
    SeedKeyword("austin pizza", "food", 4400),
    SeedKeyword("austin sushi", "food", 3600),
    SeedKeyword("austin breweries", "food", 5400),
    SeedKeyword("austin crawfish", "food", 2900),
    SeedKeyword("austin tex mex", "food", 4400),
    SeedKeyword("austin ramen", "food", 3600),
    SeedKeyword("austin seafood", "food", 2900),
    SeedKeyword("austin mexican food", "food", 6600),
    SeedKeyword("austin steakhouse", "food", 2400),
    SeedKeyword("austin burger", "food", 3600),
    SeedKeyword("austin bakery", "food", 2400),
    SeedKeyword("austin wine bar", "food", 1900),
    SeedKeyword("austin ice cream", "food", 2400),
    SeedKeyword("austin dim sum", "food", 1600),
    SeedKeyword("austin thai food", "food", 2400),
    SeedKeyword("austin indian food", "food", 2400),
    SeedKeyword("austin korean food", "food", 1900),
    SeedKeyword("austin vegan", "food", 2400),
    SeedKeyword("austin rooftop bar", "food", 3600),
    SeedKeyword("austin cocktail bar", "food", 2400),
    SeedKeyword("austin date night", "food", 4400),
    SeedKeyword("austin late night food", "food", 2900),
    # Outdoors
    SeedKeyword("austin hiking", "outdoors", 14800),
    SeedKeyword("austin swimming holes", "outdoors", 8100),
    SeedKeyword("austin parks", "outdoors", 6600),
    SeedKeyword("austin greenbelt", "outdoors", 9900),
    SeedKeyword("austin kayaking", "outdoors", 3600),
    SeedKeyword("austin disc golf", "outdoors", 2400),
    SeedKeyword("austin bluebonnets", "outdoors", 6600),
    SeedKeyword("austin camping", "outdoors", 3600),
    SeedKeyword("austin tubing", "outdoors", 6600),
    SeedKeyword("austin fishing", "outdoors", 2400),
    SeedKeyword("austin biking trails", "outdoors", 2400),
    SeedKeyword("austin running trails", "outdoors", 1900),
    SeedKeyword("austin paddle boarding", "outdoors", 2400),
    SeedKeyword("austin dog parks", "outdoors", 2900),
    # Places
    SeedKeyword("barton springs austin", "places", 12100),
    SeedKeyword("austin lake travis", "places", 5400),
    SeedKeyword("lake austin", "places", 5400),
    SeedKeyword("mckinney falls austin", "places", 4400),
    SeedKeyword("mount bonnell austin", "places", 6600),
    SeedKeyword("hamilton pool austin", "places", 8100),
    SeedKeyword("austin airport", "places", 12100),
    SeedKeyword("austin bat bridge", "places", 4400),
    SeedKeyword("austin zoo", "places", 4400),
    SeedKeyword("austin museums", "places", 3600),
    SeedKeyword("austin farmers market", "places", 3600),
    SeedKeyword("deep eddy pool austin", "places", 3600),
    SeedKeyword("zilker park austin", "places", 6600),
    SeedKeyword("lady bird lake austin", "places", 5400),
    SeedKeyword("austin convention center", "places", 3600),
    SeedKeyword("south congress austin", "places", 8100),
    SeedKeyword("austin domain", "places", 5400),
    SeedKeyword("rainey street austin", "places", 4400),
    SeedKeyword("6th street austin", "places", 6600),
    SeedKeyword("pennybacker bridge austin", "places", 2400),
    # Events
    SeedKeyword("austin live music", "events", 9900),
    SeedKeyword("austin things to do", "events", 40500),
    SeedKeyword("austin festivals", "events", 6600),
    SeedKeyword("austin comedy shows", "events", 2400),
    SeedKeyword("austin rodeo", "events", 8100),
    SeedKeyword("chicken shit bingo austin", "events", 3600),
    SeedKeyword("austin street art", "events", 1900),
    SeedKeyword("austin nightlife", "events", 6600),
    SeedKeyword("austin concerts", "events", 4400),
    SeedKeyword("austin food festival", "events", 2400),
    SeedKeyword("austin halloween", "events", 2900),
    SeedKeyword("austin christmas", "events", 3600),
    SeedKeyword("austin fourth of july", "events", 2400),
    SeedKeyword("austin game room", "events", 1600),
    SeedKeyword("austin karaoke", "events", 1900),
    SeedKeyword("austin bowling", "events", 1600),
    SeedKeyword("austin spa", "events", 2900),
    # Neighborhoods
    SeedKeyword("austin neighborhoods", "neighborhoods", 5400),
    SeedKeyword("austin east side", "neighborhoods", 3600),
    SeedKeyword("austin zilker", "neighborhoods", 4400),
    SeedKeyword("austin downtown", "neighborhoods", 6600),
    SeedKeyword("austin mueller", "neighborhoods", 2400),
    SeedKeyword("austin south lamar", "neighborhoods", 2400),
    SeedKeyword("austin north loop", "neighborhoods", 1600),
    SeedKeyword("austin west lake", "neighborhoods", 2900),
    SeedKeyword("austin cedar park", "neighborhoods", 4400),
    SeedKeyword("austin round rock", "neighborhoods", 3600),
    SeedKeyword("austin pflugerville", "neighborhoods", 2400),
    SeedKeyword("austin parking", "neighborhoods", 3600),
    SeedKeyword("austin uber", "neighborhoods", 2400),
    SeedKeyword("austin scooters", "neighborhoods", 1900),
    # Housing
    SeedKeyword("austin rent", "housing", 12100),
    SeedKeyword("austin apartments", "housing", 22200),
    SeedKeyword("austin cost of living", "housing", 6600),
    SeedKeyword("austin homes for sale", "housing", 9900),
    SeedKeyword("austin housing market", "housing", 5400),
    SeedKeyword("austin condos", "housing", 3600),
    SeedKeyword("moving to austin", "housing", 8100),
    # Weather
    SeedKeyword("austin allergies", "weather", 8100),
    SeedKeyword("austin cedar pollen", "weather", 5400),
    SeedKeyword("austin weather", "weather", 74000),
    SeedKeyword("austin oak pollen", "weather", 2400),
    SeedKeyword("austin water temperature", "weather", 1600),
    SeedKeyword("austin pollen count", "weather", 3600),
    SeedKeyword("austin heat wave", "weather", 1900),
    SeedKeyword("austin rainy season", "weather", 1300),
    # Family & Kids
    SeedKeyword("austin kids activities", "events", 4400),
    SeedKeyword("austin family fun", "events", 2400),
    SeedKeyword("austin playgrounds", "outdoors", 1900),
    # Sports
    SeedKeyword("austin fc", "events", 9900),
    SeedKeyword("austin rock climbing", "outdoors", 1900),
    SeedKeyword("austin yoga", "events", 1600),
    SeedKeyword("austin gym", "events", 2400),
)


def seeds_by_volume(seeds=SEED_KEYWORDS, limit=None) -> list[SeedKeyword]:
    """Seeds ordered by estimated volume, highest first."""
    ranked = sorted(seeds, key=lambda s: s.estimated_volume, reverse=True)
    return ranked if limit is None else ranked[:limit]
