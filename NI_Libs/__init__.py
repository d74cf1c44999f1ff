"""
NI_Libs - Nied Library Modules

This package contains the core of the Nied procedural image compositor,
organized into specialized sub-packages:

- ColorLib: Floating point RGBA color and its blending algebra
- SourcesLib: The Source contract, sampled images and combinators
- RenderLib: Parallel rasterizer and Pillow codec glue
- GraphLib: Building source trees from node/connection descriptions
"""

__version__ = "0.1.0"
