# Fat-tree topology generation for network simulators

__version__ = "0.1.0"
