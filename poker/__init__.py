"""Planning poker server: rooms, hidden estimates and simultaneous reveal."""
