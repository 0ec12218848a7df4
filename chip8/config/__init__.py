"""Configuration system for the CHIP-8 interpreter."""

from .machine_config import FaultPolicy, MachineConfig

__all__ = ["FaultPolicy", "MachineConfig"]
