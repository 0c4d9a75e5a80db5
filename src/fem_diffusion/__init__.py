"""
fem-diffusion: element-level kernel for neutron-diffusion finite elements.

Computes the local stiffness/absorption matrix (Ae) and fission source
matrix (Be) of isoparametric elements, ready to be scattered into a global
system by an external assembler.
"""

__version__ = "0.1.0"
