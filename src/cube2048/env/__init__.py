"""Gymnasium environments for the 3D sliding-tile merge puzzle."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the default 4x4x4 cube
register(
    id="Cube2048-4x4x4-v0",
    entry_point="cube2048.env.cube_env:Cube2048Env",
)

__all__ = ["Cube2048-4x4x4-v0"]
