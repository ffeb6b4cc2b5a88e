"""Application layer: services, DTOs and ports."""
