from . import passenger_mapper, driver_mapper

__all__ = ["passenger_mapper", "driver_mapper"]
