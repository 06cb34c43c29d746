"""Domain layer for ledgerbook application.

Services are imported from their modules (e.g. ``ledgerbook.domain.entry``)
so that the database layer can import entities without a cycle.
"""
