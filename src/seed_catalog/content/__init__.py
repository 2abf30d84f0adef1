from .wandering import encounter_tables, register_wandering_encounters, wandering_module

__all__ = ["encounter_tables", "register_wandering_encounters", "wandering_module"]
