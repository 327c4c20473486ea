"""Counter decomposition, VCL resolution and exposition rendering"""
