import pytest

from game.asteroids import GameConfig, InputSampler, InputState, Key, KeyTracker


@pytest.fixture
def sampler():
    return InputSampler(GameConfig())


def held(*keys, pressed=()):
    return InputState(held=frozenset(keys), pressed=frozenset(pressed))


def test_no_keys_no_intent(sampler):
    intent = sampler.sample(held())
    assert intent.rotation == 0.0
    assert intent.thrust == 0.0
    assert not intent.fire
    assert not intent.restart


def test_thrust_and_reverse(sampler):
    cfg = sampler.config
    assert sampler.sample(held(Key.W)).thrust == cfg.player_acceleration
    assert sampler.sample(held(Key.S)).thrust == -cfg.player_acceleration
    # forward wins when both are held
    assert sampler.sample(held(Key.W, Key.S)).thrust == cfg.player_acceleration


def test_rotation(sampler):
    cfg = sampler.config
    assert sampler.sample(held(Key.D)).rotation == cfg.player_rot_speed
    assert sampler.sample(held(Key.A)).rotation == -cfg.player_rot_speed
    assert sampler.sample(held(Key.A, Key.D)).rotation == cfg.player_rot_speed


def test_fire_once_per_press_when_held(sampler):
    fired = [sampler.sample(held(Key.SPACE)).fire for _ in range(5)]
    assert fired == [True, False, False, False, False]

    sampler.sample(held())
    assert sampler.sample(held(Key.SPACE)).fire


def test_fire_from_pressed_set(sampler):
    # pressed and released inside one tick still fires once
    assert sampler.sample(held(pressed=[Key.SPACE])).fire
    assert not sampler.sample(held()).fire


def test_pressed_and_new_hold_count_once(sampler):
    assert sampler.sample(held(Key.SPACE, pressed=[Key.SPACE])).fire
    assert not sampler.sample(held(Key.SPACE)).fire


def test_dead_only_processes_restart(sampler):
    intent = sampler.sample(held(Key.W, Key.D, Key.SPACE), dead=True)
    assert intent.thrust == 0.0
    assert intent.rotation == 0.0
    assert not intent.fire
    assert not intent.restart

    intent = sampler.sample(held(Key.R), dead=True)
    assert intent.restart
    # holding R is not another restart
    assert not sampler.sample(held(Key.R), dead=True).restart


def test_restart_ignored_while_alive(sampler):
    assert not sampler.sample(held(pressed=[Key.R])).restart


def test_custom_bindings():
    sampler = InputSampler(GameConfig(), bindings={"fire": Key.R})
    assert sampler.sample(held(Key.R)).fire
    assert not sampler.sample(held(Key.SPACE)).fire


def test_reset_with_held_keys_suppresses_edges(sampler):
    sampler.reset(held=[Key.SPACE])
    assert not sampler.sample(held(Key.SPACE)).fire
    sampler.sample(held())
    assert sampler.sample(held(Key.SPACE)).fire


def test_key_tracker_press_reaches_one_tick():
    tracker = KeyTracker()
    tracker.press(Key.W)
    tracker.press(Key.SPACE)
    tracker.release(Key.SPACE)

    state = tracker.consume()
    assert state.held == frozenset({Key.W})
    assert state.pressed == frozenset({Key.W, Key.SPACE})

    state = tracker.consume()
    assert state.held == frozenset({Key.W})
    assert state.pressed == frozenset()


def test_click_tap_fires_once(sampler):
    tracker = KeyTracker()
    tracker.tap(Key.SPACE)

    state = tracker.consume()
    assert Key.SPACE not in state.held
    assert sampler.sample(state).fire
    assert not sampler.sample(tracker.consume()).fire
