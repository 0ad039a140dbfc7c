import matplotlib

# Charts are rendered off-screen in tests
matplotlib.use("Agg")
