"""Rugby fixtures and results feed: API-Sports, RugbyPass and SuperSport."""
