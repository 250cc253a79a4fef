"""Role names and the standard body setups for each role."""

from __future__ import annotations

from .setup import CreepSetup


class Roles:
    QUEEN = "queen"
    FILLER = "filler"
    DRONE = "drone"
    GUARD = "guard"
    MELEE = "melee"
    RANGED = "hydralisk"
    PIONEER = "pioneer"
    CLAIMER = "claimer"
    RESERVER = "reserver"
    EXTRACTOR = "extractor"


class Setups:
    queen = CreepSetup(Roles.QUEEN, ("carry", "carry", "move"), size_limit=8)
    filler = CreepSetup(Roles.FILLER, ("carry", "carry", "move"), size_limit=1)
    miner = CreepSetup(Roles.DRONE, ("work", "work", "move"), size_limit=3)
    guard = CreepSetup(Roles.GUARD, ("attack", "move"), size_limit=3, suffix=("heal", "move"))
    melee = CreepSetup(Roles.MELEE, ("tough", "attack", "attack", "move", "move", "move"), size_limit=8)
    ranged = CreepSetup(Roles.RANGED, ("ranged_attack", "ranged_attack", "heal", "move", "move", "move"), size_limit=6)
    pioneer = CreepSetup(Roles.PIONEER, ("work", "carry", "move", "move"), size_limit=10)
    claimer = CreepSetup(Roles.CLAIMER, ("claim", "move"), size_limit=1)
    reserver = CreepSetup(Roles.RESERVER, ("claim", "move"), size_limit=4)
    extractor = CreepSetup(Roles.EXTRACTOR, ("work", "work", "move"), size_limit=8)


__all__ = ["Roles", "Setups"]
