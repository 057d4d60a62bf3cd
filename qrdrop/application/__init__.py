"""
Application layer

Orchestrates domain services and publishes domain events.
"""
