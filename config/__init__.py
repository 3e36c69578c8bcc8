# config package — authoritative source for all client and quiz configuration.
#
# Sub-modules:
#   api_config.py   — service URL, timeout, retry policy, endpoint paths, wire keys
#   quiz_params.py  — storage location and quiz domain defaults
