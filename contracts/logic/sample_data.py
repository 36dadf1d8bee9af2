from __future__ import annotations
import random
from datetime import datetime
from typing import Callable, List, Optional

from core.helpers.date_time_helper import days_from, utc_now
from ..models.contract import Contract
from ..models.contract_enums import ContractStatus, SAMPLE_TYPES

SAMPLE_COUNT = 50

COMPANIES = (
    "Apple Inc.", "Microsoft Corp.", "Google LLC", "Amazon.com", "Tesla Inc.",
    "Netflix Inc.", "Meta Platforms", "NVIDIA Corp.", "Adobe Inc.", "Salesforce Inc.",
    "IBM Corp.", "Oracle Corp.", "Intel Corp.", "Cisco Systems", "Zoom Video",
)

PARTICIPANTS = (
    "John Smith", "Emma Johnson", "Michael Brown", "Sarah Davis", "David Wilson",
    "Lisa Anderson", "Robert Taylor", "Jennifer Martinez", "William Garcia", "Amanda Rodriguez",
    "Christopher Lee", "Jessica White", "Daniel Clark", "Ashley Lewis", "Matthew Hall",
)


def sample_contracts(count: int = SAMPLE_COUNT, *,
                     rng: Optional[random.Random] = None,
                     now: Callable[[], datetime] = utc_now) -> List[Contract]:
    """
    Synthetic contracts for an empty store: start within the past year,
    end 30-730 days after start, no signature or attachment.
    """
    rng = rng or random.Random()
    out: List[Contract] = []
    for i in range(1, count + 1):
        ctype = rng.choice(SAMPLE_TYPES)
        status = rng.choice(list(ContractStatus))
        company = rng.choice(COMPANIES)
        participant = rng.choice(PARTICIPANTS)

        start = days_from(now(), -rng.randint(0, 365))
        end = days_from(start, rng.randint(30, 730))

        out.append(Contract(
            title=f"Contract #{i:03d} - {ctype.value}",
            contract_type=ctype,
            start_date=start,
            end_date=end,
            participants=f"{participant} & {company}",
            notes=(f"Sample contract for testing purposes. This is contract number {i} "
                   f"with {ctype.value} type."),
            status=status,
        ))
    return out
