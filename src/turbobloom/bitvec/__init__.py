from turbobloom.bitvec.bit_vector import BitVector, BitVectorView

__all__ = ["BitVector", "BitVectorView"]
