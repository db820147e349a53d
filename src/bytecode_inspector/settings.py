from dataclasses import dataclass

DEFAULT_TOPIC_LOOKBACK = 50


@dataclass
class AnalysisSettings:
	# How many instructions before a LOGn are searched for the topic push
	topic_lookback: int = DEFAULT_TOPIC_LOOKBACK
	window_capacity: int = 64
	strip_metadata: bool = False
	scan_all_tables: bool = True

	def stream_capacity(self, pattern_length: int = 0) -> int:
		return max(self.window_capacity, self.topic_lookback + 1, pattern_length)
