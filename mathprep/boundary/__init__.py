"""
Boundary layer: adapters to infrastructure outside the domain.

Currently the Postgres database (see mathprep.boundary.db).
"""
