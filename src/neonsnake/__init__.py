"""3D Neon Snake: a pygame arcade snake on a tilted 20x20 board."""
