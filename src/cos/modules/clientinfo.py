CLIENT_NAME = "cos-python-client"
CLIENT_VERSION = "0.3.0"
