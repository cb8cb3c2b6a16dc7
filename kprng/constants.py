# Hash primitive
HASH256_SIZE = 32   # SHA3-256 digest / internal state size
COUNTER_SIZE = 8    # 64-bit big-endian block counter
BLOCK_INPUT_SIZE = HASH256_SIZE + COUNTER_SIZE

COUNTER_MAX = (1 << 64) - 1

# Upper bound on bytes absorbed before flip (per context)
MAX_BUFFER_SIZE = 4096

# SHAKE domain-separation byte appended on flip by the legacy revision
LEGACY_DOMAIN_BYTE = 0x1F

# Seed length drawn from the OS when seeding from system entropy
SYSTEM_SEED_SIZE = 48


# Backend names
BACKEND_KECCAK256 = "keccak256"
BACKEND_SHAKE256 = "shake256"
BACKEND_KECCAK256_LEGACY = "keccak256-legacy"

DEFAULT_BACKEND = BACKEND_KECCAK256
