from typing import Sequence


class MatchThePairError(Exception):
    pass


class CircleNotFoundError(MatchThePairError):
    def __init__(self, image_id: int):
        super().__init__(f"failed to detect circle color for id={image_id}")
        self.image_id = image_id


class SubmissionRejectedError(MatchThePairError):
    # "e" means wrong answer, "slow" means we ran out of time
    def __init__(self, first: int, second: int, result: str):
        super().__init__(f"submission of {first} and {second} rejected: {result}")
        self.first = first
        self.second = second
        self.result = result


class UnmatchedColorsError(MatchThePairError):
    def __init__(self, indices: Sequence[int]):
        ids = ", ".join(str(i + 1) for i in indices)
        super().__init__(f"did not match {ids}")
        self.indices = list(indices)
