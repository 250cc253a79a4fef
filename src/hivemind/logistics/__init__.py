"""Resource logistics and decentralized spawning."""
