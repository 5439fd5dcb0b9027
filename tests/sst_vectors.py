"""Sharing tokens signed by a known owner on testnet, token 749430."""

OWNER_PRIVATE_KEY = "0xd224a8452655425be26b94a493c21b5c4b4a46f8b3a5c51bfee31eba5bd501cc"

VALID_SST = (
    "eyJ0eXAiOiJKV1QiLCJhbGciOiJzZWNwMjU2azEifQ==.eyJpc3MiOiIweDU3NzQzNzQ4NDgzNjc0ZmFhOEEzMzk1YTUxNDJGODFDYjYzQjI4NDkiLCJzdWIiOiJjZXJ0aWZpY2F0ZSIsImV4cCI6MzM1NzQ1NjAxMzEwMDAsImlhdCI6MTcwMjA0MDYyNjIxNywic3ViSWQiOjc0OTQzMCwibmV0d29yayI6InRlc3RuZXQiLCJwZXJtaXQiOnsicGVybWl0dGVkIjp7InRva2VuIjoiMHhkN2UzY2M0MzgyRERmNmQ3MDI2M0NjMTIzMjlFMTg5RkU0MDQ0QTRlIiwidG9rZW5JZCI6NzQ5NDMwfSwic3BlbmRlciI6IjB4N0Y5RDk1NDU2MjlkNzg0NDcwMDQ1MTA5ZTIyMDZEOTk3YjVFODkyNiIsIm5vbmNlIjowLCJkZWFkbGluZSI6NDg1NTY0MDYyNn0sInBlcm1pdFNpZyI6IjB4NzYxNjJlZmZhNWNjYTMzZjRmY2Q4NTQxZTA5Njg1NWJkZWYxMDJiNTJlYWEyYjE3NDE0YTM2OTNlZjgxMzQxMzBjYzEzZDI5NDY3ODkxYzFjYTdlYWRmZmVmNDk5ZmEzZjU4NjQ3ZmFiMjUyNWZiYmRhZmU0YTQzNWRjMmM2NTQxYiJ9"
    ".0x7da9f93342bd4f60a19e175d114afd626ad0228597d080b4e2755e63fe50116376a2db6a1360b8105b4924d99bfaabd1312f8333f1786ddc9000fea326be36de1b"
)

INVALID_SST_PERMIT_WRONG_SIG = (
    "eyJ0eXAiOiJKV1QiLCJhbGciOiJzZWNwMjU2azEifQ==.eyJpc3MiOiIweDREOTUwOTAzOTVCMjA4MjU5Mjk1OWY4ZDhFQzhEMzRCYjBCRDdkMTMiLCJzdWIiOiJjZXJ0aWZpY2F0ZSIsImV4cCI6MzM1NzQ1NjAxMzEwMDAsImlhdCI6MTcwMjA0MDU4MTAxOSwic3ViSWQiOjc0OTQzMCwibmV0d29yayI6InRlc3RuZXQiLCJwZXJtaXQiOnsicGVybWl0dGVkIjp7InRva2VuIjoiMHhkN2UzY2M0MzgyRERmNmQ3MDI2M0NjMTIzMjlFMTg5RkU0MDQ0QTRlIiwidG9rZW5JZCI6NzQ5NDMwfSwic3BlbmRlciI6IjB4N0Y5RDk1NDU2MjlkNzg0NDcwMDQ1MTA5ZTIyMDZEOTk3YjVFODkyNiIsIm5vbmNlIjowLCJkZWFkbGluZSI6NDg1NTY0MDU4MX0sInBlcm1pdFNpZyI6IjB4OTk4ZDdhM2QwOGZlNDA3MjIyMWY5ODA0ZGRkNjE4YTk0Njg5YzgzMmZiMjU2ODY1ZWExZmExNmRmNjQzYzM3ZjViODk1ZDZhNjRiOTAxOTliZTc5ZTJmOWUxMGFkZWVjYTEyMzA2NTRmNmRmMzc2MjE3ZmUyMWZlMTI3NTc0NTgxYyJ9"
    ".0x19930b0977fda4e569d5462887e6b8638c1b97dcd8a322fc632ef2f233d4c5071cd4f8bfb2cfd1e9ca3f8462aad716c83fd6596420b8af9059fde72d8cc8a48c1b"
)

INVALID_SST_PERMIT_EXPIRED = (
    "eyJ0eXAiOiJKV1QiLCJhbGciOiJzZWNwMjU2azEifQ==.eyJpc3MiOiIweDU3NzQzNzQ4NDgzNjc0ZmFhOEEzMzk1YTUxNDJGODFDYjYzQjI4NDkiLCJzdWIiOiJjZXJ0aWZpY2F0ZSIsImV4cCI6MzM1NzQ1NjAxMzEwMDAsImlhdCI6MTcwMjA0MDY0ODk1MCwic3ViSWQiOjc0OTQzMCwibmV0d29yayI6InRlc3RuZXQiLCJwZXJtaXQiOnsicGVybWl0dGVkIjp7InRva2VuIjoiMHhkN2UzY2M0MzgyRERmNmQ3MDI2M0NjMTIzMjlFMTg5RkU0MDQ0QTRlIiwidG9rZW5JZCI6NzQ5NDMwfSwic3BlbmRlciI6IjB4N0Y5RDk1NDU2MjlkNzg0NDcwMDQ1MTA5ZTIyMDZEOTk3YjVFODkyNiIsIm5vbmNlIjowLCJkZWFkbGluZSI6MTcwMjA0MDY0OH0sInBlcm1pdFNpZyI6IjB4N2UxY2ExNmFjZDY1ODU1OTIyOTllMWEyMTAxZDQ1NTBkZmM3N2VjMTQwODU1ZTEwMTNhMDg2Mzg3ZTczNWJiNDI0NTg5ZjA2ZDAyNWQ3NmQ1MmEzZmNkMTE2MjM2OTJiMmU1NzBjODk4Njc1Y2Q1ZWQ2ZTVkZmUzOThhNzU2OWMxYyJ9"
    ".0xd5bbcd677fd2030c51516c1e03b495eb8cb1f8b98c65b47356ebf904c06c6afb3991c630077831c94ff52c4e38bc2702ff28e61f63530703001796eb9d0ab3ff1c"
)
