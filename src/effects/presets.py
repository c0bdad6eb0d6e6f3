"""
Named parameter presets for the convolution filter and color transform.

Blur, Sharpen, Greyscale and Sepia are plain instances, not subclasses.
"""

from effects.color_transform import ColorTransform
from effects.convolution import ConvolutionFilter

BLUR_KERNEL = [
    [0.0625, 0.125, 0.0625],
    [0.125, 0.25, 0.125],
    [0.0625, 0.125, 0.0625],
]

SHARPEN_KERNEL = [
    [-0.125, -0.125, -0.125, -0.125, -0.125],
    [-0.125, 0.25, 0.25, 0.25, -0.125],
    [-0.125, 0.25, 1.0, 0.25, -0.125],
    [-0.125, 0.25, 0.25, 0.25, -0.125],
    [-0.125, -0.125, -0.125, -0.125, -0.125],
]

# Rec. 709 luma; identical rows give every channel the same value
GREYSCALE_MATRIX = [
    [0.2126, 0.7152, 0.0722],
    [0.2126, 0.7152, 0.0722],
    [0.2126, 0.7152, 0.0722],
]

SEPIA_MATRIX = [
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
]

BLUR = ConvolutionFilter(BLUR_KERNEL, name="Blur")
SHARPEN = ConvolutionFilter(SHARPEN_KERNEL, name="Sharpen")
GREYSCALE = ColorTransform(GREYSCALE_MATRIX, name="Greyscale")
SEPIA = ColorTransform(SEPIA_MATRIX, name="Sepia")
