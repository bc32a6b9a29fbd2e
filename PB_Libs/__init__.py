"""
PB_Libs - PixelBead Library Modules

This package contains core functionality for the PixelBead project,
organized into specialized sub-packages:

- ColorLib: Lab color conversion, palette loading and nearest-color matching
- ConvertLib: Photo and photographed-pattern to bead grid conversion
- GridLib: Sparse bead grid editing (tools, history, selection, denoise)
- DraftStoreLib: Draft file management and export handoff
"""

__version__ = "0.1.0"
