from types import MappingProxyType

# Slot with no recognisable weapon in the arsenal image
UNDEFINED_WEAPON = "undefined"

# Arsenal grid coordinate ("row,col") -> display name.
# Several slots share a name (SG, until, i31, i3, square); their counts are summed.
WEAPON_MAP = MappingProxyType({
    "0,0": "SG",
    "0,1": "RL",
    "0,2": UNDEFINED_WEAPON,
    "0,3": "square",
    "0,4": "i2",
    "0,5": "dot",
    "1,0": "SG",
    "1,1": "ar",
    "1,2": "until",
    "1,3": "until",
    "1,4": "i31",
    "1,5": "square",
    "2,0": "sr",
    "2,1": "fire",
    "2,2": "laser",
    "2,3": "i3",
    "2,4": "i31",
    "2,5": "i3",
})


def weapon_names() -> set[str]:
    return {name for name in WEAPON_MAP.values() if name != UNDEFINED_WEAPON}
