from .borsh import BorshWriter, encode_int
from .address import (
    keccak256,
    is_smaller_than_bn254_field_size_be,
    hash_to_bn254_field_size_be,
    hashv_to_bn254_field_size_be,
    hashv_to_bn254_field_size_be_u8_array,
    derive_address_seed,
    derive_address_seed_v2,
    derive_address,
    derive_address_v2,
)
