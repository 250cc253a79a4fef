from .roles import Roles, Setups
from .setup import BODYPART_COST, CREEP_SPAWN_TIME, CreepSetup, body_cost

__all__ = ["BODYPART_COST", "CREEP_SPAWN_TIME", "CreepSetup", "Roles", "Setups", "body_cost"]
