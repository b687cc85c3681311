from mock_device_server.main import run

run()
