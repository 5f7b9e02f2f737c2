from cpuguard.main import run

run()
