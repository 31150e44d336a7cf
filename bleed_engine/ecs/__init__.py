from .components import ComponentStore
from .entity import EntityIDGenerator
from .system import System, SystemRegistry
from .world import World

__all__ = ["ComponentStore", "EntityIDGenerator", "System", "SystemRegistry", "World"]
