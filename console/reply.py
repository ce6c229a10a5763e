from dataclasses import dataclass, field


@dataclass
class Reply:
    lines: list[str] = field(default_factory=list)
    elapsed: float | None = None

    def timed(self, elapsed: float) -> 'Reply':
        return Reply(
            lines=self.lines,
            elapsed=elapsed
        )

    def render(self) -> list[str]:
        lines = list(self.lines)
        if self.elapsed is not None:
            lines.append(f"Operation time: {self.elapsed:.6f} seconds")
        return lines

def reply(*lines: str) -> Reply:
    return Reply(lines=list(lines))
