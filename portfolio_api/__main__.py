from portfolio_api.main import run

run()
