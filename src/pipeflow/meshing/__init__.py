from .mesh_data import MeshData1D

__all__ = ["MeshData1D"]
