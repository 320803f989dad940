import pytest

from tactics_ai.value import (
    caution_for_profile,
    get_available_profiles,
    list_profiles,
    load_weights,
)
from tactics_ai.value.weights import ScoringPolicy, load_weight_table


def test_policy_sections_override_common():
    baseline = load_weights(ScoringPolicy.BASELINE)
    refined = load_weights("refined")
    assert baseline.capture_city_value == refined.capture_city_value == 10000
    assert (baseline.pointless_city_attack_value, refined.pointless_city_attack_value) == (0, -10000)
    assert (baseline.siege_city_bonus, refined.siege_city_bonus) == (100, 150)
    assert (baseline.default_min_attack_value, refined.default_min_attack_value) == (30, -25)


def test_force_ratio_bounds_are_floats():
    w = load_weights("refined")
    assert isinstance(w.force_ratio_min, float) and w.force_ratio_min == 0.5
    assert isinstance(w.kill_bonus, int)


def test_overrides_apply_last():
    assert load_weights("refined", overrides={"kill_bonus": 40}).kill_bonus == 40


def test_unknown_weight_key_is_rejected():
    with pytest.raises(ValueError, match="Unknown weight keys: kil_bonus"):
        load_weights("refined", overrides={"kil_bonus": 40})


def test_unknown_policy_lists_the_available_ones():
    with pytest.raises(ValueError, match="baseline, refined"):
        load_weights("aggressive")


def test_custom_weights_file(tmp_path):
    table = load_weight_table()
    custom = tmp_path / "weights.yaml"
    lines = ["common:"]
    lines += [f"  {k}: {v}" for k, v in table["common"].items() if k != "kill_bonus"]
    lines += ["  kill_bonus: 7", "refined:"]
    lines += [f"  {k}: {v}" for k, v in table["refined"].items()]
    custom.write_text("\n".join(lines) + "\n", encoding="utf-8")
    assert load_weights("refined", path=str(custom)).kill_bonus == 7


def test_profiles():
    assert get_available_profiles() == ["cautious", "decisive", "normal", "reckless"]
    assert caution_for_profile("Cautious") == 0.6
    assert caution_for_profile("reckless") == 0.0


def test_unknown_profile():
    with pytest.raises(ValueError, match="Available profiles: cautious, decisive, normal, reckless"):
        caution_for_profile("berserk")


def test_list_profiles_prints_in_caution_order(capsys):
    list_profiles()
    out = capsys.readouterr().out
    assert out.index("reckless") < out.index("normal") < out.index("cautious") < out.index("decisive")
