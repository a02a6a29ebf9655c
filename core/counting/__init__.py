"""
Package core.counting - Word counting pipeline.

Modules:
- tokenizer: Tach line thanh cac word (Unicode letters)
- frequency_table: FrequencyTable va Pair
- file_scanner: Doc 1 file, dem words vao private table
- channel: Fan-in channel 2 lanes (pairs + completions)
- aggregator: ConcurrentAggregator (fan-out, collect, drain)
"""
