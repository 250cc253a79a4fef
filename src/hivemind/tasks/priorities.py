"""Overlord priorities. Lower numbers run (and spawn) first."""

from __future__ import annotations


class OverlordPriority:
    class emergency:
        bootstrap = 0

    class core:
        queen = 100

    class defense:
        melee = 200
        ranged = 201

    class colonization:
        claim = 400
        pioneer = 401

    class owned_room:
        mine = 501
        mineral_rcl8 = 503
        mineral = 520

    class outpost_defense:
        outpost_defense = 550
        guard = 551

    class remote_room:
        reserve = 601
        mine = 602

    class remote_sk_room:
        mineral = 1001


__all__ = ["OverlordPriority"]
