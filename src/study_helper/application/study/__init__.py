"""Study use cases: local store synchronization and remote import."""
