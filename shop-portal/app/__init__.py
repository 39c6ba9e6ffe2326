# Shop Portal application
