"""
Pydantic schema definitions for API payloads, stored records and
responses.  Schemas are kept separate from the storage layer so the
API representation can evolve independently of persistence.
"""
