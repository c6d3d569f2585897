"""Cigarette brand reference data — static lookup, no computation.

Yields are educational machine-yield style values (mg per cigarette) based on
ranges from public reports. Unknown ids resolve to the reference profile.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CigaretteBrand:
    id: str
    name: str
    nicotine_mg: float
    tar_mg: float
    category: str  # "full-flavor" | "light" | "menthol" | "reference"
    source_note: str = "Public machine-yield range"


DEFAULT_BRAND_ID = "average-us-king"

CIGARETTE_BRANDS: tuple[CigaretteBrand, ...] = (
    CigaretteBrand(DEFAULT_BRAND_ID, "Average US king-size (reference)", 1.0, 12, "reference", "Reference profile"),
    CigaretteBrand("marlboro-red", "Marlboro Red", 1.0, 12, "full-flavor"),
    CigaretteBrand("marlboro-gold", "Marlboro Gold", 0.7, 8, "light"),
    CigaretteBrand("marlboro-menthol", "Marlboro Menthol", 0.9, 11, "menthol"),
    CigaretteBrand("camel-filters", "Camel Filters", 0.8, 11, "full-flavor"),
    CigaretteBrand("camel-blue", "Camel Blue", 0.7, 8, "light"),
    CigaretteBrand("camel-crush", "Camel Crush", 0.9, 11, "menthol"),
    CigaretteBrand("newport-menthol", "Newport Menthol", 1.1, 13, "menthol"),
    CigaretteBrand("newport-gold", "Newport Gold", 0.8, 9, "menthol"),
    CigaretteBrand("parliament-full-flavor", "Parliament Full Flavor", 0.9, 10, "full-flavor"),
    CigaretteBrand("parliament-lights", "Parliament Lights", 0.7, 8, "light"),
    CigaretteBrand("pall-mall-red", "Pall Mall Red", 1.2, 16, "full-flavor"),
    CigaretteBrand("pall-mall-blue", "Pall Mall Blue", 0.8, 10, "light"),
    CigaretteBrand("american-spirit-original", "American Spirit Original", 1.2, 13, "full-flavor"),
    CigaretteBrand("american-spirit-light-blue", "American Spirit Light Blue", 0.8, 9, "light"),
    CigaretteBrand("winston-red", "Winston Red", 0.9, 12, "full-flavor"),
    CigaretteBrand("winston-gold", "Winston Gold", 0.7, 8, "light"),
    CigaretteBrand("lucky-strike-original-red", "Lucky Strike Original Red", 1.1, 13, "full-flavor"),
    CigaretteBrand("kool-filter-kings", "Kool Filter Kings", 0.9, 12, "menthol"),
    CigaretteBrand("salem-menthol", "Salem Menthol", 0.8, 10, "menthol"),
    CigaretteBrand("virginia-slims-menthol", "Virginia Slims Menthol", 0.7, 9, "menthol"),
    CigaretteBrand("misty-blue", "Misty Blue", 0.6, 7, "light"),
    CigaretteBrand("l-m-red", "L&M Red", 0.9, 11, "full-flavor"),
    CigaretteBrand("l-m-blue", "L&M Blue", 0.7, 8, "light"),
    CigaretteBrand("chesterfield-red", "Chesterfield Red", 1.0, 12, "full-flavor"),
    CigaretteBrand("basic-full-flavor", "Basic Full Flavor", 0.9, 12, "full-flavor"),
    CigaretteBrand("basic-light", "Basic Light", 0.7, 8, "light"),
    CigaretteBrand("doral-full-flavor", "Doral Full Flavor", 0.9, 11, "full-flavor"),
    CigaretteBrand("doral-light", "Doral Light", 0.7, 8, "light"),
    CigaretteBrand("kent-fhd", "Kent FHD", 0.8, 10, "full-flavor"),
    CigaretteBrand("kent-lights", "Kent Lights", 0.6, 7, "light"),
    CigaretteBrand("305s-red", "305s Red", 1.0, 12, "full-flavor"),
    CigaretteBrand("305s-gold", "305s Gold", 0.7, 8, "light"),
    CigaretteBrand("montego-red", "Montego Red", 0.9, 11, "full-flavor"),
    CigaretteBrand("montego-blue", "Montego Blue", 0.7, 8, "light"),
)

BRANDS_BY_ID: dict[str, CigaretteBrand] = {brand.id: brand for brand in CIGARETTE_BRANDS}


def is_known_brand(brand_id: str) -> bool:
    return brand_id in BRANDS_BY_ID


def get_brand_by_id(brand_id: str) -> CigaretteBrand:
    """Return the brand, or the reference brand for unknown ids. Never None."""
    return BRANDS_BY_ID.get(brand_id, BRANDS_BY_ID[DEFAULT_BRAND_ID])


def list_brands() -> list[CigaretteBrand]:
    return list(CIGARETTE_BRANDS)
