"""
Vehicle preset catalog.

Usable battery capacities (kWh) of common EVs sold in France, used to
pre-fill the active vehicle. The custom entry has no capacity and must be
edited by the user.
"""

from typing import List, Optional

from ..models import Vehicle

CUSTOM_VEHICLE_NAME = "Autre / Personnalisé"

_PRESETS = [
    ("Renault 5 E-TECH (40)", 40),
    ("Renault 5 E-TECH (52)", 52),
    ("Renault Mégane E-TECH (40)", 40),
    ("Renault Mégane E-TECH (60)", 60),
    ("Renault Scénic E-TECH", 87),
    ("Renault ZOE R135", 52),
    ("Peugeot e-208 (50)", 50),
    ("Peugeot e-208 (51, MY24)", 51),
    ("Peugeot e-2008 (50/51)", 51),
    ("Peugeot e-308", 54),
    ("Peugeot e-3008 (Std Range)", 73),
    ("Peugeot e-3008 (Long Range)", 98),
    ("Citroën ë-C3", 44),
    ("Citroën ë-C4 (50/54)", 54),
    ("Citroën Ami", 5.5),
    ("Opel Corsa Electric (50/51)", 51),
    ("Fiat 500e (42)", 42),
    ("Fiat 600e", 54),
    ("Dacia Spring", 27),
    ("Tesla Model 3 RWD", 60),
    ("Tesla Model 3 Long Range", 75),
    ("Tesla Model Y RWD", 60),
    ("Tesla Model Y Long Range", 75),
    ("Volkswagen ID.3 (Pro)", 58),
    ("Volkswagen ID.4 (Pro/Max)", 77),
    ("Škoda Enyaq 80/85", 82),
    ("Cupra Born (58)", 58),
    ("BMW i4 eDrive40 / M50", 84),
    ("BMW iX1", 66),
    ("MINI Cooper Electric (SE)", 54),
    ("Mercedes-Benz EQA", 67),
    ("Hyundai Kona Electric (Long Range)", 65),
    ("Hyundai IONIQ 5 (Long Range)", 84),
    ("Kia Niro EV", 65),
    ("Kia EV6 (Long Range)", 77),
    ("Nissan LEAF (40)", 40),
    ("Nissan LEAF e+ (62)", 62),
    ("Toyota bZ4X", 71),
    ("BYD Dolphin (Extended)", 60),
    ("BYD Atto 3", 60),
    ("MG4 Electric (Std)", 51),
    ("MG4 Electric (Long Range)", 64),
    ("Volvo EX30 (Extended)", 64),
    ("Polestar 2 (Long Range)", 82),
]


def list_vehicle_presets() -> List[Vehicle]:
    """All presets sorted by name, with the custom entry last."""
    presets = sorted(
        (Vehicle(name=name, battery_capacity_kwh=float(capacity)) for name, capacity in _PRESETS),
        key=lambda v: v.name.casefold(),
    )
    presets.append(Vehicle(name=CUSTOM_VEHICLE_NAME, battery_capacity_kwh=0.0))
    return presets


def find_vehicle_preset(name: str) -> Optional[Vehicle]:
    """Case-insensitive lookup by preset name."""
    if not name:
        return None
    wanted = name.strip().casefold()
    for preset in list_vehicle_presets():
        if preset.name.casefold() == wanted:
            return preset
    return None
