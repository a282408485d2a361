"""Services domain - piercing services offered by the studio"""
