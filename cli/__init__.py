"""vgm2nsf command line interface."""
