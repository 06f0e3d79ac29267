"""Media Item Controllers - one entity controller per media type over a shared base."""
