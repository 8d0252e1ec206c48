"""Audio capture constants shared by the capture and segmentation layers."""

SAMPLE_RATE = 16000
