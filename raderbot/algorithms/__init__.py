"""Technical-analysis algorithms that turn candles into buy, sell or ignore signals."""