"""BMP280 register encodings and asynchronous drivers over supplied I2C and SPI buses."""