"""
Training configuration for the asteroids environment
"""

# Gameplay parameters (GameConfig fields)
GAME_CONFIG = {
    "width": 800,
    "height": 600,
    "fps": 60,
    "shot_max": 10,
    "shot_velocity": 4.0,
    "player_max_velocity": 2.0,
    "player_acceleration": 0.05,
    "asteroid_scale": 10.0,
}

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "game_config": GAME_CONFIG,
    "max_steps": 3600,  # 60 seconds at 60 ticks/s
    "k_asteroids": 6,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Score-driven with a death penalty",
    "R_SCORE": 0.01,     # Per score point (25 per tier of asteroid destroyed)
    "R_WAVE": 1.0,       # Bonus for clearing a wave
    "R_SHOT": 0.005,     # Penalty for shooting (encourage aiming)
    "R_TIME": 0.0005,    # Small time penalty
    "R_DEATH": 5.0,      # Death penalty
}

REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize survival - staying alive outweighs score",
    "R_SCORE": 0.005,
    "R_WAVE": 0.5,
    "R_SHOT": 0.01,
    "R_TIME": -0.001,    # Negative penalty = reward for every tick alive
    "R_DEATH": 10.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.995,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 1_000_000,
    "save_freq": 20_000,
    "eval_freq": 10_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}


def reward_params(name: str) -> dict:
    """Reward weights for AsteroidsEnv(reward_config=...), without the descriptive keys"""
    if name not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {name} (choose from {sorted(REWARD_CONFIGS)})")
    return {k: v for k, v in REWARD_CONFIGS[name].items() if k.startswith("R_")}
