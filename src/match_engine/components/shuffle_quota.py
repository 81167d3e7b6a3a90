from dataclasses import dataclass

@dataclass(slots=True)
class ShuffleQuota:
    remaining: int

    def consume(self) -> bool:
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return True
