"""Raw record fetch and normalization per source."""
