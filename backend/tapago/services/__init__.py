"""
Services module - per-user stores, default data seeding and the fitlog
service that combines them with the analytics engine.
"""
