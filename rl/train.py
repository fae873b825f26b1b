"""
Training script for the grid space game using Stable-Baselines3
Supports PPO and DQN (the action space is a single Discrete(6)).

    python -m rl.train --algo ppo --timesteps 100000
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from spacegame import SpaceGameEnv
from rl.configs.game_config import ENV_CONFIG, REWARD_CONFIG, PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback


def make_env(seed: Optional[int] = None):
    """Factory function to create the environment"""
    def _init():
        env = SpaceGameEnv(reward_config=REWARD_CONFIG, **ENV_CONFIG)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def _run_dirs(algo: str, save_dir, log_dir, tensorboard_log):
    """Per-algorithm directories under the TRAINING_CONFIG roots"""
    if save_dir is None:
        save_dir = os.path.join(TRAINING_CONFIG["model_dir"], algo)
    if log_dir is None:
        log_dir = os.path.join(TRAINING_CONFIG["log_dir"], algo)
    if tensorboard_log is None:
        tensorboard_log = os.path.join(TRAINING_CONFIG["tensorboard_log"], algo)
    return save_dir, log_dir, tensorboard_log


def _banner(text: str) -> None:
    print(f"\n{'='*60}")
    print(text)
    print(f"{'='*60}\n")


def _callbacks(algo: str, save_dir: str, log_dir: str, eval_env, n_envs: int = 1):
    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
        save_path=save_dir,
        name_prefix=f"{algo}_spacegame",
    )
    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(1, TRAINING_CONFIG["eval_freq"] // n_envs),
        deterministic=True,
        render=False,
    )
    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name=algo, verbose=1)
    tb_callback = TensorboardMetricsCallback(verbose=0)
    return [checkpoint_callback, eval_callback, metrics_callback, tb_callback], metrics_callback


def _report(algo: str, final_path: str, metrics_callback: MetricsCallback) -> None:
    summary = metrics_callback.get_summary()
    lines = [f"{algo.upper()} Training complete! Model saved to {final_path}"]
    if summary:
        lines.append(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        lines.append(f"Mean Score: {summary['mean_score']:.1f}  Mean Kills: {summary['mean_kills']:.1f}")
        lines.append(f"Total Episodes: {summary['total_episodes']}")
    _banner("\n".join(lines))


def train_ppo(
    total_timesteps: Optional[int] = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
    n_envs: int = 4,
):
    """Train PPO agent on the space game"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    save_dir, log_dir, tensorboard_log = _run_dirs("ppo", save_dir, log_dir, tensorboard_log)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    _banner(f"Training PPO for {total_timesteps:,} timesteps...\nUsing {n_envs} parallel environments")

    env = DummyVecEnv([make_env(seed=i) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=False, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=100)])
    eval_env = VecNormalize(eval_env, norm_obs=False, norm_reward=False, training=False)

    callbacks, metrics_callback = _callbacks("ppo", save_dir, log_dir, eval_env, n_envs)

    model = PPO(env=env, tensorboard_log=tensorboard_log, **PPO_CONFIG)
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, "ppo_spacegame_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    _report("ppo", final_path, metrics_callback)
    return model, metrics_callback


def train_dqn(
    total_timesteps: Optional[int] = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
):
    """Train DQN agent on the space game"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    save_dir, log_dir, tensorboard_log = _run_dirs("dqn", save_dir, log_dir, tensorboard_log)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    _banner(f"Training DQN for {total_timesteps:,} timesteps...")

    env = DummyVecEnv([make_env(seed=0)])
    eval_env = DummyVecEnv([make_env(seed=100)])

    callbacks, metrics_callback = _callbacks("dqn", save_dir, log_dir, eval_env)

    model = DQN(env=env, tensorboard_log=tensorboard_log, **DQN_CONFIG)
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, "dqn_spacegame_final")
    model.save(final_path)

    _report("dqn", final_path, metrics_callback)
    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on the space game")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )

    args = parser.parse_args()

    if args.algo in ("dqn", "all"):
        train_dqn(total_timesteps=args.timesteps)
    if args.algo in ("ppo", "all"):
        train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs)


if __name__ == "__main__":
    main()
