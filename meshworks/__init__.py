"""OBJ/MTL loading, a binary mesh cache, mesh simplification, ray picking, scene components and viewport layout."""

__version__ = "0.1.0"