from typing import Literal

UserRole = Literal["candidate", "employer"]

CANDIDATE = "candidate"
EMPLOYER = "employer"
