from secreport.main import run

run()
