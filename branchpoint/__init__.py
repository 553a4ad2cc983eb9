"""BranchPoint - decision journaling API with AI branch simulations"""

__version__ = "0.1.0"
