from liftsim.controller.main import run

run()
