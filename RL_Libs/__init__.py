"""
RL_Libs - Rover Lens Library Modules

This package contains core functionality for the Rover Lens project,
organized into specialized sub-packages:

- RasterLib: Raster data types and the numeric building blocks (luma,
  convolution, gradients, dilation, tone mapping, color mixing)
- EffectsLib: Effect parameters, effect executors and the effect pipeline
- RenderLib: Image fetch/decode, PNG export, approximate preview rendering,
  render sessions and effect presets
"""

__version__ = "0.1.0"
