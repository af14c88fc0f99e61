"""
Areas and tables module.

Seating areas, the tables inside them and table occupancy.
"""
