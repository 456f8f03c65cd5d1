"""
Pydantic schema definitions for API payloads.

Each entity (clients, projects, tasks, invoices) defines its own
models for request and response bodies.  Schemas use domain field
names; translation to and from the record store's field names happens
in the corresponding service.
"""
