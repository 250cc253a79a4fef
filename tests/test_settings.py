import pytest

from hivemind.settings import Autonomy, ColonySettings, OverseerSettings


def test_defaults_match_private_deployment():
    settings = OverseerSettings()

    assert settings.use_try_catch
    assert settings.outpost_check_frequency == 100
    assert settings.spawn_group_recache_time == 1000
    assert settings.disregard_reservations


def test_public_server_timings():
    settings = OverseerSettings(public_server=True)

    assert settings.outpost_check_frequency == 250
    assert settings.spawn_group_recache_time == 2000
    assert not settings.disregard_reservations


def test_reservation_override_on_public_server():
    settings = OverseerSettings(public_server=True, username="Me", reservation_override_usernames=("Me",))

    assert settings.disregard_reservations


def test_from_env():
    settings = OverseerSettings.from_env(
        {
            "HIVEMIND_PUBLIC_SERVER": "yes",
            "HIVEMIND_USE_TRY_CATCH": "0",
            "HIVEMIND_USERNAME": "Me",
            "HIVEMIND_RESERVATION_OVERRIDES": "Me, Ally ,",
            "HIVEMIND_AUTONOMY": "manual",
        }
    )

    assert settings.public_server
    assert not settings.use_try_catch
    assert settings.username == "Me"
    assert settings.reservation_override_usernames == ("Me", "Ally")
    assert settings.autonomy == Autonomy.MANUAL


def test_from_env_rejects_unknown_autonomy():
    with pytest.raises(ValueError):
        OverseerSettings.from_env({"HIVEMIND_AUTONOMY": "sometimes"})


def test_from_env_without_variables_gives_defaults():
    assert OverseerSettings.from_env({}) == OverseerSettings()


def test_colony_remote_sources_by_level():
    settings = ColonySettings()

    assert settings.remote_sources_by_level[8] == 9
    assert settings.max_source_distance == 100
