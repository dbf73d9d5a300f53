"""Supporting utilities: I/O, logging, metrics and visualisation."""
